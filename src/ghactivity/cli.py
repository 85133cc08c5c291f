from __future__ import annotations

import argparse
import asyncio
import json
import logging
from typing import Sequence

from ghactivity.config.loader import load_config
from ghactivity.config.models import PluginSettings
from ghactivity.core.catalog import describe
from ghactivity.core.errors import AdapterError, ConfigError
from ghactivity.logging.setup import configure_logging
from ghactivity.plugin import GitHubActivityPlugin
from ghactivity.plugins.registry import build_adapter


def build_plugin(config: PluginSettings) -> tuple[GitHubActivityPlugin, object]:
    """Build the plugin and the host it talks through (close the host after use)."""
    host = build_adapter(config.runtime.host_adapter, timeout=config.github.timeout)
    plugin = GitHubActivityPlugin(
        host=host,
        oauth=config.oauth,
        user_config=config.user,
        github=config.github,
    )
    return plugin, host


async def _run(args: argparse.Namespace, config: PluginSettings) -> None:
    plugin, host = build_plugin(config)
    try:
        if args.command == "authorize-url":
            print(await plugin.get_authorization_url())
        elif args.command == "exchange-token":
            print(await plugin.get_access_token(args.code))
        elif args.command == "refresh-profile":
            updated = await plugin.edit_user_config()
            print(json.dumps(updated.to_host(), indent=2))
        elif args.command == "events":
            events = await plugin.get_events()
            if args.format == "json":
                print(json.dumps([event.to_dict() for event in events], indent=2))
            elif not events:
                print("No tracked activity.")
            else:
                for event in events:
                    print(
                        f"{event.timestamp}  {event.type.value:<24} x{event.multiplier:<4} "
                        f"{event.id}  {describe(event.type)}"
                    )
    finally:
        aclose = getattr(host, "aclose", None)
        if callable(aclose):
            await aclose()


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="GitHub activity events for gamification")
    parser.add_argument("--config", required=True, help="Path to config YAML file")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("authorize-url", help="Print the GitHub OAuth authorization URL")
    token_p = sub.add_parser("exchange-token", help="Exchange an OAuth code for an access token")
    token_p.add_argument("--code", required=True, help="Code from the OAuth redirect")
    sub.add_parser("refresh-profile", help="Fetch the GitHub profile and print the updated user config")
    events_p = sub.add_parser("events", help="Fetch and classify the user's recent activity")
    events_p.add_argument("--format", choices=("json", "table"), default="table", help="Output format")

    args = parser.parse_args(argv)
    logger = logging.getLogger("CLI")
    try:
        config = load_config(args.config)
        configure_logging(config.runtime.log_level)
        logger.info("Loaded configuration", extra={"command": args.command})
        asyncio.run(_run(args, config))
    except (ConfigError, AdapterError) as exc:
        logger.error("Fatal error: %s", exc)
        raise SystemExit(1) from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unhandled error")
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
