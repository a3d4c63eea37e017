"""Mapping from SDK method names to option keys.

``setClusterName`` becomes ``cluster-name``, ``getShardFailures`` becomes
``shard-failures`` and a setter taking a single ``bool`` gets a trailing
``?`` (``setExplain(bool)`` becomes ``explain?``). Snake-case SDKs map the
same way: ``set_cluster_name`` becomes ``cluster-name``.
"""

from __future__ import annotations

import re

from .errors import ConfigurationError

BOOLEAN_MARKER = "?"

_PREFIX_RE = re.compile(r"^(?:set|get)_?(?=[A-Z_]|$)")
_CAMEL_RE = re.compile(r"([a-z0-9])([A-Z])")


def _strip_prefix(name: str) -> str:
    return _PREFIX_RE.sub("", name, count=1)


def method_to_option_key(name: str, *, boolean: bool = False) -> str:
    if not name or not isinstance(name, str):
        raise ConfigurationError(repr(name), "method name must be a non-empty string")

    stem = _strip_prefix(name)
    stem = _CAMEL_RE.sub(r"\1-\2", stem)
    key = stem.replace("_", "-").strip("-").lower()
    key = re.sub(r"-{2,}", "-", key)
    if not key:
        raise ConfigurationError(name, "method name maps to an empty option key")

    if boolean:
        key += BOOLEAN_MARKER
    return key


def is_boolean_key(key: str) -> bool:
    return key.endswith(BOOLEAN_MARKER)


def option_key_to_identifier(key: str) -> str:
    """Python identifier for an option key: ``cluster-name`` -> ``cluster_name``."""
    if is_boolean_key(key):
        key = key[: -len(BOOLEAN_MARKER)]
    return key.replace("-", "_")
