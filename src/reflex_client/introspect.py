"""Structural discovery of SDK methods.

Only used while operations are being generated. Nothing here runs on the
per-call path.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import typing
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Self

from .errors import ConfigurationError
from .naming import method_to_option_key

logger = logging.getLogger(__name__)

GETTER_DENYLIST = frozenset({"getClass", "getShardFailures", "get_class", "get_shard_failures"})
ITERATOR_FIELD = "iterator"

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


@dataclass(frozen=True, slots=True)
class ExecuteMethod:
    name: str
    function: Callable[..., Any]
    accepts_listener: bool


def resolve_class(path: str, *, package: str | None = None) -> type:
    """Import ``module.Class`` (or ``module:Class``); leading dots are relative to ``package``."""
    if path.startswith("."):
        if not package:
            raise ConfigurationError(path, "relative class path needs a package")
        path = package + path

    if ":" in path:
        module_name, _, attr_path = path.partition(":")
    else:
        module_name, _, attr_path = path.rpartition(".")
    if not module_name or not attr_path:
        raise ConfigurationError(path, "expected a dotted path 'module.Class'")

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(path, f"cannot import module {module_name!r}", cause=exc) from exc

    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ConfigurationError(path, f"{module_name!r} has no attribute {attr_path!r}", cause=exc) from exc

    if not isinstance(target, type):
        raise ConfigurationError(path, "does not name a class")
    return target


def _public_functions(klass: type) -> dict[str, Callable[..., Any]]:
    found: dict[str, Callable[..., Any]] = {}
    for owner in reversed(klass.__mro__):
        if owner is object:
            continue
        for name, attr in vars(owner).items():
            if name.startswith("_"):
                continue
            if isinstance(attr, (staticmethod, classmethod, property)):
                found.pop(name, None)
                continue
            if inspect.isfunction(attr):
                found[name] = attr
            else:
                found.pop(name, None)
    return dict(sorted(found.items()))


def _hints(function: Callable[..., Any], klass: type) -> dict[str, Any]:
    localns = {klass.__name__: klass}
    for base in klass.__mro__[1:]:
        localns.setdefault(base.__name__, base)
    try:
        return typing.get_type_hints(function, localns=localns)
    except (NameError, TypeError, AttributeError):
        return dict(getattr(function, "__annotations__", {}))


def _parameters(function: Callable[..., Any]) -> list[inspect.Parameter] | None:
    try:
        params = list(inspect.signature(function).parameters.values())
    except (TypeError, ValueError):
        return None
    if any(p.kind in _VARIADIC for p in params):
        return None
    # drop self
    return params[1:]


def _names_type(annotation: Any, candidates: tuple[type, ...]) -> bool:
    if isinstance(annotation, str):
        return annotation in {c.__name__ for c in candidates}
    return any(annotation is c for c in candidates)


def _immediate_base(klass: type) -> type | None:
    bases = [b for b in klass.__bases__ if b is not object]
    return bases[0] if bases else None


def is_settable_method(klass: type, function: Callable[..., Any]) -> bool:
    params = _parameters(function)
    if params is None or len(params) != 1:
        return False

    returned = _hints(function, klass).get("return", inspect.Signature.empty)
    if returned is Self or returned == "Self":
        return True
    allowed = tuple(t for t in (klass, _immediate_base(klass)) if t is not None)
    return _names_type(returned, allowed)


def takes_boolean(klass: type, function: Callable[..., Any]) -> bool:
    params = _parameters(function)
    if not params:
        return False
    annotation = _hints(function, klass).get(params[0].name, params[0].annotation)
    return annotation is bool or annotation == "bool"


def settable_methods(klass: type) -> dict[str, Callable[..., Any]]:
    """Fluent setters of ``klass`` by method name."""
    return {
        name: function
        for name, function in _public_functions(klass).items()
        if is_settable_method(klass, function)
    }


def _is_getter_name(name: str) -> bool:
    if name in GETTER_DENYLIST or not name.startswith("get"):
        return False
    rest = name[3:]
    return bool(rest) and (rest[0].isupper() or (rest[0] == "_" and len(rest) > 1))


def is_iterable_type(klass: type) -> bool:
    return getattr(klass, "__iter__", None) is not None


def gettable_methods(klass: type) -> dict[str, Callable[..., Any]]:
    """Zero-argument ``get*`` accessors of ``klass`` by method name."""
    getters: dict[str, Callable[..., Any]] = {}
    for name, function in _public_functions(klass).items():
        if not _is_getter_name(name):
            continue
        params = _parameters(function)
        if params is None or any(p.default is inspect.Parameter.empty for p in params):
            continue
        getters[name] = function
    return getters


def field_extractors(klass: type) -> dict[str, Callable[[Any], Any]]:
    """Option key -> extractor for every gettable field, plus ``iterator`` for iterables."""
    extractors: dict[str, Callable[[Any], Any]] = {}
    for name, function in gettable_methods(klass).items():
        extractors[method_to_option_key(name)] = function
    if is_iterable_type(klass):
        extractors[ITERATOR_FIELD] = _materialize
    if not extractors:
        raise ConfigurationError(klass.__qualname__, "response type has no gettable methods")
    return extractors


def _materialize(response: Iterable[Any]) -> list[Any]:
    return list(iter(response))


def find_execute_method(request_type: type, client_type: type) -> ExecuteMethod:
    """The single method of ``client_type`` whose only required parameter is a ``request_type``."""
    matches: list[ExecuteMethod] = []
    for name, function in _public_functions(client_type).items():
        params = _parameters(function)
        if not params:
            continue
        required = [p for p in params if p.default is inspect.Parameter.empty]
        if len(required) != 1 or required[0].kind not in _POSITIONAL or required[0] is not params[0]:
            continue
        hints = _hints(function, client_type)
        annotation = hints.get(required[0].name, required[0].annotation)
        if not _names_type(annotation, (request_type,)):
            continue
        accepts_listener = len(params) > 1 and params[1].kind in _POSITIONAL
        matches.append(ExecuteMethod(name=name, function=function, accepts_listener=accepts_listener))

    subject = f"{client_type.__qualname__}/{request_type.__qualname__}"
    if not matches:
        raise ConfigurationError(subject, "no execute method accepts this request type")
    if len(matches) > 1:
        names = ", ".join(m.name for m in matches)
        raise ConfigurationError(subject, f"several execute methods accept this request type: {names}")

    logger.debug("execute method for %s is %s", subject, matches[0].name)
    return matches[0]
