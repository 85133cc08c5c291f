"""GitHub activity plugin exposed to the host application.

The host supplies network and date capabilities plus the OAuth app and user
configuration; the plugin turns those into an authorization URL, a token
exchange, a refreshed user config and a list of weighted events.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping
from urllib.parse import quote, urlencode

from pydantic import ValidationError

from ghactivity.config.models import GitHubConfig, OAuthAppConfig, UserConfig
from ghactivity.core.catalog import EVENT_TYPES
from ghactivity.core.errors import ConfigError, MalformedActivityData, TokenExchangeError
from ghactivity.core.interfaces import HostCapabilities
from ghactivity.core.models import NormalizedEvent
from ghactivity.engine.classification import normalize_activity_feed


class GitHubActivityPlugin:
    event_types = EVENT_TYPES

    def __init__(
        self,
        host: HostCapabilities,
        oauth: OAuthAppConfig,
        user_config: UserConfig,
        github: GitHubConfig | None = None,
    ) -> None:
        self._logger = logging.getLogger(self.__class__.__name__)
        self._host = host
        self._oauth = oauth
        self._user_config = user_config
        self._github = github or GitHubConfig()

    @property
    def user_config(self) -> UserConfig:
        return self._user_config

    async def get_authorization_url(self) -> str:
        query = urlencode(
            {
                "client_id": self._oauth.client_id,
                "scope": self._oauth.scope,
                "redirect_uri": self._oauth.redirect_url,
            },
            quote_via=quote,
        )
        return f"{self._oauth.authorize_url}?{query}"

    async def get_access_token(self, code: str) -> str:
        response = await self._host.http_post(
            str(self._oauth.token_url),
            headers={"Accept": "application/json"},
            body={
                "client_id": self._oauth.client_id,
                "client_secret": self._oauth.client_secret,
                "code": code,
                "redirect_uri": self._oauth.redirect_url,
            },
        )
        token = response.get("access_token") if isinstance(response, dict) else None
        if not token:
            error = response.get("error") if isinstance(response, dict) else None
            description = response.get("error_description") if isinstance(response, dict) else None
            self._logger.warning("GitHub token exchange returned no token", extra={"error": error})
            raise TokenExchangeError(error, description)
        self._logger.info("Exchanged OAuth code for access token")
        return token

    async def edit_user_config(self) -> UserConfig:
        profile = await self._host.http_get(
            f"{self._api_base}/user", params=None, headers=self._auth_headers()
        )
        if not isinstance(profile, dict):
            raise MalformedActivityData("GitHub profile response is not an object")
        if not profile.get("login"):
            self._logger.warning(
                "GitHub profile has no login; username will be cleared",
                extra={"previous_username": self._user_config.username},
            )
        updated = self._user_config.model_copy(
            update={"username": profile.get("login"), "id": profile.get("id")}
        )
        self._logger.info(
            "Refreshed GitHub profile",
            extra={"username": updated.username, "previous_username": self._user_config.username},
        )
        return updated

    async def get_events(self) -> list[NormalizedEvent]:
        username = self._user_config.username
        if not username:
            raise ConfigError("User config has no GitHub username; refresh the profile first")
        feed = await self._host.http_get(
            f"{self._api_base}/users/{quote(username, safe='')}/events",
            params={},
            headers=self._auth_headers(),
        )
        if not isinstance(feed, list):
            raise MalformedActivityData(
                f"GitHub activity feed is not a list: {type(feed).__name__}"
            )
        events = normalize_activity_feed(feed, self._host.parse_timestamp)
        self._logger.info(
            "Normalized GitHub activity",
            extra={"username": username, "received": len(feed), "emitted": len(events)},
        )
        return events

    @property
    def _api_base(self) -> str:
        return str(self._github.api_base).rstrip("/")

    def _auth_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self._user_config.access_token:
            headers["Authorization"] = f"token {self._user_config.access_token}"
        return headers


def create_plugin(
    host: HostCapabilities,
    plugin_config: OAuthAppConfig | Mapping[str, Any],
    user_config: UserConfig | Mapping[str, Any],
    github: GitHubConfig | Mapping[str, Any] | None = None,
) -> GitHubActivityPlugin:
    """Build a plugin from host-supplied configuration (models or plain mappings)."""
    try:
        if not isinstance(plugin_config, OAuthAppConfig):
            plugin_config = OAuthAppConfig.model_validate(plugin_config)
        if not isinstance(user_config, UserConfig):
            user_config = UserConfig.model_validate(user_config)
        if github is not None and not isinstance(github, GitHubConfig):
            github = GitHubConfig.model_validate(github)
    except ValidationError as exc:
        raise ConfigError(f"Invalid plugin configuration: {exc}") from exc
    return GitHubActivityPlugin(host, plugin_config, user_config, github)
