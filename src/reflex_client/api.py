from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping, Sequence

from .catalog import CLIENT_PATHS, REQUESTS, RESPONSES, RequestDescriptor, ResponseDescriptor
from .categories import ClientCategory
from .connection import get_default_client
from .convert import ConverterRegistry, OutputFormat
from .errors import ConfigurationError
from .introspect import resolve_class
from .naming import option_key_to_identifier
from .operation import Operation, generate_operation

logger = logging.getLogger(__name__)


class Api:
    """Read-only table of generated operations, reachable by name or attribute."""

    def __init__(self, operations: Mapping[str, Operation], converters: ConverterRegistry) -> None:
        self.operations: Mapping[str, Operation] = MappingProxyType(dict(operations))
        self.converters = converters
        self._by_identifier = {option_key_to_identifier(name): op for name, op in self.operations.items()}

    def __getitem__(self, name: str) -> Operation:
        return self.operations[name]

    def __getattr__(self, name: str) -> Operation:
        try:
            return self.__dict__["_by_identifier"][name]
        except KeyError:
            raise AttributeError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self.operations

    def __iter__(self) -> Iterator[str]:
        return iter(self.operations)

    def __len__(self) -> int:
        return len(self.operations)

    def convert(self, response: Any, fmt: OutputFormat | str | None = None) -> Any:
        return self.converters.convert(response, fmt)


def build_converters(responses: Sequence[ResponseDescriptor], *, package: str | None = None) -> ConverterRegistry:
    converters = ConverterRegistry()
    for descriptor in responses:
        response_type = resolve_class(descriptor.response_path, package=package)
        converters.register_strategy(response_type, descriptor.strategy)
    return converters


def build_api(
    requests: Sequence[RequestDescriptor] = REQUESTS,
    responses: Sequence[ResponseDescriptor] = RESPONSES,
    *,
    package: str | None = None,
    clients: Mapping[ClientCategory, str] = CLIENT_PATHS,
    default_client: Callable[[], Any] = get_default_client,
) -> Api:
    """Resolve every descriptor and generate the operation table.

    Any configuration error aborts the whole pass; no partial table is returned.
    """
    converters = build_converters(responses, package=package)
    converters.freeze()

    client_types: dict[ClientCategory, type] = {}
    operations: dict[str, Operation] = {}
    for descriptor in requests:
        if descriptor.name in operations:
            raise ConfigurationError(descriptor.name, "operation is declared twice")

        category = ClientCategory.parse(descriptor.category)
        if category not in client_types:
            if category not in clients:
                raise ConfigurationError(descriptor.name, f"no client class for category {category.value!r}")
            client_types[category] = resolve_class(clients[category], package=package)

        request_type = resolve_class(descriptor.request_path, package=package)
        operations[descriptor.name] = generate_operation(
            descriptor.name,
            request_type,
            descriptor.constructor_keys,
            client_types[category],
            category,
            converters,
            default_client=default_client,
        )

    logger.info("Generated %d operations and %d converters", len(operations), len(converters))
    return Api(operations, converters)
