"""Resolve host adapters from ``module:Class`` paths found in config."""

from __future__ import annotations

import importlib
from typing import Any

from ghactivity.core.errors import AdapterError

_HOST_METHODS = ("http_get", "http_post", "parse_timestamp")


def load_adapter(dotted_path: str) -> type:
    module_path, sep, class_name = dotted_path.partition(":")
    if not sep or not module_path or not class_name:
        raise AdapterError(f"Adapter path must look like 'package.module:Class': {dotted_path}")
    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        raise AdapterError(f"Unable to import adapter module: {module_path}") from exc
    adapter_cls = getattr(module, class_name, None)
    if adapter_cls is None:
        raise AdapterError(f"Module {module_path} has no attribute {class_name}")
    return adapter_cls


def build_adapter(dotted_path: str, **kwargs: Any) -> Any:
    """Instantiate a host adapter and check it offers the host capabilities."""
    adapter = load_adapter(dotted_path)(**kwargs)
    missing = [name for name in _HOST_METHODS if not callable(getattr(adapter, name, None))]
    if missing:
        raise AdapterError(f"{dotted_path} is missing host capabilities: {', '.join(missing)}")
    return adapter
