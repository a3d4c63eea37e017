from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Any, Callable, Mapping, Sequence

from .categories import ClientCategory
from .connection import get_default_client
from .convert import ConverterRegistry
from .errors import ConfigurationError, MissingArgumentError
from .listener import as_listener
from .request_spec import RequestSpec, build_request_spec

logger = logging.getLogger(__name__)

RESERVED_KEYS = frozenset({"debug", "listener", "format"})

_NO_CLIENT = object()


def coerce(value: Any) -> Any:
    """Sequences become fixed-size tuples; everything else passes through."""
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return value


def wait_for(result: Any) -> Any:
    """Block on whatever the SDK's synchronous execute path returned."""
    for name in ("action_get", "actionGet"):
        method = getattr(result, name, None)
        if callable(method):
            return method()
    if isinstance(result, Future):
        return result.result()
    return result


class Operation:
    """One generated client operation.

    Call it as ``op(options)`` to use the default client, or
    ``op(client, options)`` with an explicit handle.
    """

    def __init__(
        self,
        name: str,
        spec: RequestSpec,
        constructor_keys: Sequence[str],
        category: ClientCategory,
        converters: ConverterRegistry,
        *,
        default_client: Callable[[], Any] = get_default_client,
    ) -> None:
        self.name = name
        self.spec = spec
        self.constructor_keys = tuple(constructor_keys)
        self.category = category
        self._converters = converters
        self._default_client = default_client

        optional = spec.optional_keys(self.constructor_keys)
        self._setters = {k: spec.setters[k] for k in optional if k not in RESERVED_KEYS}
        shadowed = sorted(RESERVED_KEYS & set(spec.setters))
        if shadowed:
            logger.debug("%s: options %s are reserved and never applied as setters", name, shadowed)

        self.__doc__ = (
            f"Required args: {list(self.constructor_keys)}. "
            f"Generated from class {spec.request_type.__module__}.{spec.request_type.__qualname__}"
        )

    @property
    def request_type(self) -> type:
        return self.spec.request_type

    @property
    def option_keys(self) -> list[str]:
        return list(self._setters)

    def __repr__(self) -> str:
        return f"<Operation {self.name} ({self.category.value}) {self.request_type.__qualname__}>"

    def __call__(self, *args: Any) -> Any:
        if len(args) == 1:
            client, options = _NO_CLIENT, args[0]
        elif len(args) == 2:
            client, options = args
        else:
            raise TypeError(f"{self.name}() takes (options) or (client, options), got {len(args)} arguments")
        return self.invoke(client, options)

    def build(self, options: Mapping[str, Any]) -> Any:
        """Construct and configure the request without executing it."""
        values = []
        for key in self.constructor_keys:
            if key not in options:
                raise MissingArgumentError(self.name, key)
            values.append(coerce(options[key]))

        request = self.spec.request_type(*values)
        for key, binding in self._setters.items():
            if key in options:
                binding.apply(request, coerce(options[key]))
        return request

    def invoke(self, client: Any, options: Mapping[str, Any]) -> Any:
        request = self.build(options)
        if options.get("debug"):
            return request

        if client is _NO_CLIENT:
            client = self._default_client()
        target = self.category.resolve(client)
        execute = self.spec.execute

        listener = options.get("listener")
        if listener is not None:
            if not execute.accepts_listener:
                raise TypeError(f"{self.name}: execute method {execute.name!r} does not take a listener")
            logger.debug("%s: dispatching %s asynchronously", self.name, execute.name)
            return getattr(target, execute.name)(request, as_listener(listener))

        logger.debug("%s: dispatching %s", self.name, execute.name)
        response = wait_for(getattr(target, execute.name)(request))
        return self._converters.convert(response, options.get("format"))


def generate_operation(
    name: str,
    request_type: type,
    constructor_keys: Sequence[str],
    client_type: type,
    category: ClientCategory,
    converters: ConverterRegistry,
    *,
    default_client: Callable[[], Any] = get_default_client,
) -> Operation:
    spec = build_request_spec(request_type, client_type)
    unknown = [k for k in constructor_keys if k in RESERVED_KEYS]
    if unknown:
        raise ConfigurationError(name, f"constructor keys {unknown} are reserved option names")
    operation = Operation(
        name,
        spec,
        constructor_keys,
        category,
        converters,
        default_client=default_client,
    )
    logger.debug("generated %r with options %s", operation, operation.option_keys)
    return operation
