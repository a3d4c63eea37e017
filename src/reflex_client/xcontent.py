"""Structured-content conversion.

Response types that know how to write themselves expose
``to_xcontent(builder, params)`` and a class-level ``EMPTY_PARAMS``. They are
written into a :class:`ContentBuilder`, which assembles plain dicts and lists
instead of bytes.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Mapping, Sequence

from .errors import ConfigurationError

_MISSING = object()
_SCALARS = (str, bytes, bytearray, int, float, bool, type(None))


def to_builtin(value: Any, convert: Callable[[Any], Any] | None = None) -> Any:
    """Builtins only; other objects go through ``convert`` when one is given."""
    if isinstance(value, Mapping):
        return {str(k): to_builtin(v, convert) for k, v in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [to_builtin(v, convert) for v in value]
    if isinstance(value, (set, frozenset)):
        return [to_builtin(v, convert) for v in value]
    if isinstance(value, Enum):
        return value.value
    if hasattr(value, "to_xcontent") and not isinstance(value, type):
        return write_xcontent(value, getattr(value, "EMPTY_PARAMS", None))
    if convert is not None and not isinstance(value, _SCALARS):
        return convert(value)
    return value


class ContentBuilder:
    """Collects ``start_object``/``field``/``end_object`` style writes into builtins."""

    def __init__(self) -> None:
        self._stack: list[tuple[str | None, dict[str, Any] | list[Any]]] = []
        self._pending_name: str | None = None
        self._root: Any = _MISSING

    def _take_name(self, name: str | None) -> str | None:
        if name is None:
            name, self._pending_name = self._pending_name, None
        elif self._pending_name is not None:
            raise ValueError(f"field {self._pending_name!r} has no value")
        return name

    def _emit(self, name: str | None, value: Any) -> None:
        if not self._stack:
            if self._root is not _MISSING:
                raise ValueError("content already has a root value")
            self._root = value
            return
        container = self._stack[-1][1]
        if isinstance(container, dict):
            if name is None:
                raise ValueError("values inside an object need a field name")
            container[name] = value
        else:
            if name is not None:
                raise ValueError(f"field {name!r} written inside an array")
            container.append(value)

    def start_object(self, name: str | None = None) -> "ContentBuilder":
        self._stack.append((self._take_name(name), {}))
        return self

    def end_object(self) -> "ContentBuilder":
        return self._close(dict)

    def start_array(self, name: str | None = None) -> "ContentBuilder":
        self._stack.append((self._take_name(name), []))
        return self

    def end_array(self) -> "ContentBuilder":
        return self._close(list)

    def _close(self, kind: type) -> "ContentBuilder":
        if not self._stack or not isinstance(self._stack[-1][1], kind):
            raise ValueError(f"unbalanced end of {kind.__name__}")
        if self._pending_name is not None:
            raise ValueError(f"field {self._pending_name!r} has no value")
        name, container = self._stack.pop()
        self._emit(name, container)
        return self

    def field(self, name: str, value: Any = _MISSING) -> "ContentBuilder":
        if value is _MISSING:
            if self._pending_name is not None:
                raise ValueError(f"field {self._pending_name!r} has no value")
            self._pending_name = name
            return self
        self._emit(self._take_name(name), to_builtin(value))
        return self

    def value(self, value: Any) -> "ContentBuilder":
        self._emit(self._take_name(None), to_builtin(value))
        return self

    def null_field(self, name: str) -> "ContentBuilder":
        self._emit(self._take_name(name), None)
        return self

    def result(self) -> Any:
        if self._stack:
            raise ValueError("content has unclosed objects or arrays")
        if self._root is _MISSING:
            return None
        return self._root


def write_xcontent(response: Any, params: Any) -> Any:
    builder = ContentBuilder()
    builder.start_object()
    response.to_xcontent(builder, params)
    builder.end_object()
    return builder.result()


def empty_params(response_type: type) -> Any:
    if "EMPTY_PARAMS" not in dir(response_type):
        raise ConfigurationError(response_type.__qualname__, "no EMPTY_PARAMS marker for structured content")
    return getattr(response_type, "EMPTY_PARAMS")


class XContentConverter:
    def __init__(self, response_type: type) -> None:
        if not callable(getattr(response_type, "to_xcontent", None)):
            raise ConfigurationError(response_type.__qualname__, "does not implement to_xcontent")
        self.response_type = response_type
        self.empty_params = empty_params(response_type)

    def structured(self, response: Any) -> Any:
        return write_xcontent(response, self.empty_params)

    def __repr__(self) -> str:
        return f"XContentConverter({self.response_type.__qualname__})"
