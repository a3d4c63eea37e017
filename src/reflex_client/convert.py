"""Response conversion.

A :class:`ConverterRegistry` maps response types to converters. Every
converter produces the generic structured form of a response; the registry
applies the requested output format on top of it:

- ``native`` (alias ``java``): the SDK response itself, untouched,
- ``structured`` (alias ``clj``): dicts, lists and scalars,
- ``text`` (alias ``json``): the structured form serialised as JSON.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Protocol, runtime_checkable

from .errors import ConfigurationError, ConversionError
from .introspect import field_extractors
from .xcontent import XContentConverter, to_builtin

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    NATIVE = "native"
    STRUCTURED = "structured"
    TEXT = "text"

    @classmethod
    def parse(cls, value: "OutputFormat | str | None") -> "OutputFormat":
        if value is None:
            return cls.STRUCTURED
        if isinstance(value, cls):
            return value
        name = str(value).lstrip(":").lower()
        return _FORMAT_ALIASES.get(name, cls.STRUCTURED)


_FORMAT_ALIASES: dict[str, OutputFormat] = {
    "native": OutputFormat.NATIVE,
    "java": OutputFormat.NATIVE,
    "structured": OutputFormat.STRUCTURED,
    "clj": OutputFormat.STRUCTURED,
    "text": OutputFormat.TEXT,
    "json": OutputFormat.TEXT,
}


@runtime_checkable
class Converter(Protocol):
    def structured(self, response: Any) -> Any:
        """Return the response as builtins only (dicts, lists and scalars)."""
        ...


class FieldConverter:
    """Generic conversion built from the ``get*`` accessors of a response type.

    Nested SDK objects use the converter the registry holds for their type,
    or a field converter of their own getters. Objects without getters are
    rendered with ``str``.
    """

    def __init__(self, response_type: type, registry: ConverterRegistry | None = None) -> None:
        self.response_type = response_type
        self.registry = registry
        self.fields: Mapping[str, Callable[[Any], Any]] = MappingProxyType(field_extractors(response_type))
        self._nested: dict[type, Converter | None] = {}

    def structured(self, response: Any) -> dict[str, Any]:
        return {key: to_builtin(extract(response), self._convert_nested) for key, extract in self.fields.items()}

    def _convert_nested(self, value: Any) -> Any:
        converter = self._nested_converter(type(value))
        if converter is None:
            return str(value)
        return converter.structured(value)

    def _nested_converter(self, value_type: type) -> Converter | None:
        if self.registry is not None:
            registered = self.registry.converter_for(value_type)
            if registered is not None:
                return registered
        if value_type not in self._nested:
            try:
                self._nested[value_type] = FieldConverter(value_type, self.registry)
            except ConfigurationError:
                logger.debug("%s has no getters; rendering nested values with str()", value_type.__qualname__)
                self._nested[value_type] = None
        return self._nested[value_type]

    def __repr__(self) -> str:
        return f"FieldConverter({self.response_type.__qualname__}, fields={sorted(self.fields)})"


class FunctionConverter:
    def __init__(self, function: Callable[[Any], Any]) -> None:
        self.function = function

    def structured(self, response: Any) -> Any:
        return self.function(response)

    def __repr__(self) -> str:
        return f"FunctionConverter({getattr(self.function, '__name__', self.function)!r})"


def _field_name(field: Any, default: Any) -> Any:
    name = getattr(field, "name", None)
    if callable(name):
        return name()
    if name is not None:
        return name
    getter = getattr(field, "getName", None) or getattr(field, "get_name", None)
    return getter() if callable(getter) else default


def _field_value(field: Any) -> Any:
    for attr in ("value", "getValue", "get_value"):
        candidate = getattr(field, attr, None)
        if candidate is None:
            continue
        return candidate() if callable(candidate) else candidate
    return field


def _call(response: Any, *names: str) -> Any:
    for name in names:
        method = getattr(response, name, None)
        if method is not None:
            return method() if callable(method) else method
    raise AttributeError(f"{type(response).__qualname__} has none of {names}")


def convert_fields(fields: Mapping[Any, Any]) -> dict[Any, Any]:
    return {_field_name(f, key): to_builtin(_field_value(f)) for key, f in fields.items()}


def convert_get(response: Any) -> dict[str, Any]:
    """Conversion for existence-flagged document responses."""
    data: dict[str, Any] = {}
    if _call(response, "exists", "isExists", "is_exists"):
        data["_index"] = _call(response, "getIndex", "get_index")
        data["_type"] = _call(response, "getType", "get_type")
        data["_id"] = _call(response, "getId", "get_id")
        data["_version"] = _call(response, "getVersion", "get_version")
    if not _call(response, "isSourceEmpty", "is_source_empty"):
        data["_source"] = to_builtin(_call(response, "sourceAsMap", "source_as_map"))
    fields = _call(response, "getFields", "get_fields")
    if fields:
        data["fields"] = convert_fields(fields)
    return data


STRATEGIES: dict[str, Callable[[type, ConverterRegistry], Converter]] = {
    "xcontent": lambda response_type, _registry: XContentConverter(response_type),
    "object": FieldConverter,
    "get": lambda _response_type, _registry: FunctionConverter(convert_get),
}


class ConverterRegistry:
    def __init__(self) -> None:
        self._converters: dict[type, Converter] = {}
        self._frozen = False

    def register(self, response_type: type, converter: Converter) -> None:
        if self._frozen:
            raise ConfigurationError(response_type.__qualname__, "converter registry is frozen")
        if not isinstance(converter, Converter):
            raise ConfigurationError(response_type.__qualname__, f"{converter!r} is not a converter")
        if response_type in self._converters:
            logger.debug("replacing converter for %s", response_type.__qualname__)
        self._converters[response_type] = converter
        logger.debug("registered %r for %s", converter, response_type.__qualname__)

    def register_strategy(self, response_type: type, strategy: str) -> Converter:
        try:
            factory = STRATEGIES[strategy]
        except KeyError:
            raise ConfigurationError(response_type.__qualname__, f"unknown conversion strategy {strategy!r}") from None
        converter = factory(response_type, self)
        self.register(response_type, converter)
        return converter

    def freeze(self) -> None:
        self._frozen = True

    def converter_for(self, response_type: type) -> Converter | None:
        for klass in response_type.__mro__:
            converter = self._converters.get(klass)
            if converter is not None:
                return converter
        return None

    def __contains__(self, response_type: object) -> bool:
        return isinstance(response_type, type) and self.converter_for(response_type) is not None

    def __len__(self) -> int:
        return len(self._converters)

    def convert(self, response: Any, fmt: OutputFormat | str | None = None) -> Any:
        output = OutputFormat.parse(fmt)
        if output is OutputFormat.NATIVE:
            return response

        converter = self.converter_for(type(response))
        if converter is None:
            raise ConversionError(f"No converter registered for {type(response).__qualname__}")

        data = converter.structured(response)
        if output is OutputFormat.TEXT:
            return json.dumps(data)
        return data
