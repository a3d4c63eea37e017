"""Client handles: configuration, creation and the process-wide default.

Creating the actual SDK handle is left to a :class:`ClientFactory` supplied
by the caller. This module only prepares the settings it receives.
"""

from __future__ import annotations

import json
import logging
import os
import re
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Mapping, Protocol, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator
from ruamel.yaml import YAML

from .errors import NoDefaultClientError
from .xcontent import to_builtin

logger = logging.getLogger(__name__)

DEFAULT_TRANSPORT_PORT = 9300

_ADDRESS_RE = re.compile(r"([^\[:]+)[\[:]?(\d*)")


class ConnectionSpec(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    cluster_name: str | None = Field(default=None, alias="cluster-name")
    hosts: list[str] = Field(default_factory=list)
    settings: dict[str, Any] = Field(default_factory=dict)
    sniff: bool = True
    local_mode: bool = Field(default=False, alias="local-mode")
    client_mode: bool = Field(default=True, alias="client-mode")
    load_config: bool = Field(default=False, alias="load-config")

    @field_validator("hosts", mode="before")
    @classmethod
    def _split_hosts(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [h.strip() for h in value.split(",") if h.strip()]
        return value

    @classmethod
    def from_file(cls, path: str | Path) -> "ConnectionSpec":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Missing connection config: {path}")
        if path.suffix.lower() in {".yaml", ".yml"}:
            yaml = YAML(typ="safe")
            with path.open("r", encoding="utf-8") as file:
                data = yaml.load(file)
        else:
            with path.open("r", encoding="utf-8") as file:
                data = json.load(file)
        return cls.model_validate(to_builtin(data or {}))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ConnectionSpec":
        env = os.environ if environ is None else environ
        data: dict[str, Any] = {}
        if env.get("REFLEX_CLUSTER_NAME"):
            data["cluster_name"] = env["REFLEX_CLUSTER_NAME"]
        if env.get("REFLEX_HOSTS"):
            data["hosts"] = env["REFLEX_HOSTS"]
        if env.get("REFLEX_SNIFF"):
            data["sniff"] = env["REFLEX_SNIFF"].strip().lower() in {"1", "true", "yes", "on"}
        return cls.model_validate(data)


def settings_map(settings: Mapping[str, Any]) -> dict[str, str | list[str]]:
    """Flatten backend settings to strings; sequences become lists of strings."""
    out: dict[str, str | list[str]] = {}
    for key, value in settings.items():
        if isinstance(value, (list, tuple)):
            out[str(key)] = [str(v) for v in value]
        elif isinstance(value, bool):
            out[str(key)] = "true" if value else "false"
        else:
            out[str(key)] = str(value)
    return out


@dataclass(frozen=True, slots=True)
class TransportAddress:
    host: str
    port: int


def parse_transport_address(spec: str) -> TransportAddress:
    """Parse ``host``, ``host:port`` or ``host[port]``."""
    match = _ADDRESS_RE.match(spec.strip())
    if match is None:
        raise ValueError(f"Invalid transport address: {spec!r}")
    host, port = match.group(1), match.group(2)
    return TransportAddress(host=host, port=int(port) if port else DEFAULT_TRANSPORT_PORT)


def node_settings(spec: ConnectionSpec) -> dict[str, str | list[str]]:
    settings: dict[str, Any] = dict(spec.settings)
    if spec.hosts:
        settings["discovery.zen.ping.unicast.hosts"] = list(spec.hosts)
        settings["discovery.zen.ping.multicast.enabled"] = False
    if spec.cluster_name:
        settings["cluster.name"] = spec.cluster_name
    settings["node.client"] = spec.client_mode
    settings["node.local"] = spec.local_mode
    return settings_map(settings)


def transport_settings(spec: ConnectionSpec) -> dict[str, str | list[str]]:
    settings: dict[str, Any] = dict(spec.settings)
    if spec.cluster_name:
        settings["cluster.name"] = spec.cluster_name
    settings["client.transport.sniff"] = spec.sniff
    return settings_map(settings)


class ClientFactory(Protocol):
    def node(self, settings: Mapping[str, Any], *, load_config: bool) -> Any: ...

    def transport(
        self,
        settings: Mapping[str, Any],
        addresses: Sequence[TransportAddress],
        *,
        load_config: bool,
    ) -> Any: ...


def make_client(kind: str, spec: ConnectionSpec, factory: ClientFactory) -> Any:
    """Create a ``node`` or ``transport`` client handle; anything else means transport."""
    if kind == "node":
        logger.info("Opening node client (cluster=%s)", spec.cluster_name)
        return factory.node(node_settings(spec), load_config=spec.load_config)
    addresses = [parse_transport_address(h) for h in spec.hosts]
    logger.info("Opening transport client (cluster=%s, hosts=%d)", spec.cluster_name, len(addresses))
    return factory.transport(transport_settings(spec), addresses, load_config=spec.load_config)


_default_lock = threading.Lock()
_default_client: Any = None


def set_default_client(client: Any) -> Any:
    """Bind the process-wide default handle; returns the previous one."""
    global _default_client
    with _default_lock:
        previous, _default_client = _default_client, client
    return previous


def get_default_client() -> Any:
    client = _default_client
    if client is None:
        raise NoDefaultClientError("No client given and no default client is bound")
    return client


@contextmanager
def using_client(client: Any) -> Iterator[Any]:
    previous = set_default_client(client)
    try:
        yield client
    finally:
        set_default_client(previous)


def _close(client: Any) -> None:
    close = getattr(client, "close", None)
    if callable(close):
        close()


@contextmanager
def node_client(spec: ConnectionSpec, factory: ClientFactory) -> Iterator[Any]:
    """Open a node client, bind it as the default and close it afterwards."""
    node = make_client("node", spec, factory)
    client = node.client() if callable(getattr(node, "client", None)) else node
    try:
        with using_client(client):
            yield client
    finally:
        _close(node)


@contextmanager
def transport_client(spec: ConnectionSpec, factory: ClientFactory) -> Iterator[Any]:
    client = make_client("transport", spec, factory)
    try:
        with using_client(client):
            yield client
    finally:
        _close(client)


def build_document(doc: Mapping[str, Any]) -> str:
    """Serialise a document for indexing."""
    return json.dumps(to_builtin(doc))
