from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class ActionListener(Protocol):
    """Callback pair handed to an SDK's asynchronous execute path.

    The SDK calls exactly one of the two methods, once, on one of its own
    threads. Responses arrive unconverted.
    """

    def on_response(self, response: Any) -> None: ...

    def on_failure(self, error: BaseException) -> None: ...


@dataclass(frozen=True, slots=True)
class CallbackListener:
    on_failure_fn: Callable[[BaseException], Any]
    on_response_fn: Callable[[Any], Any]

    def on_response(self, response: Any) -> None:
        self.on_response_fn(response)

    def on_failure(self, error: BaseException) -> None:
        self.on_failure_fn(error)


def make_listener(
    *,
    on_failure: Callable[[BaseException], Any],
    on_response: Callable[[Any], Any],
) -> CallbackListener:
    return CallbackListener(on_failure_fn=on_failure, on_response_fn=on_response)


def as_listener(value: Any) -> ActionListener:
    """Accept a listener object or a ``{"on-failure": ..., "on-response": ...}`` mapping."""
    if isinstance(value, ActionListener):
        return value
    if isinstance(value, dict):
        on_failure = value.get("on_failure", value.get("on-failure"))
        on_response = value.get("on_response", value.get("on-response"))
        if callable(on_failure) and callable(on_response):
            return make_listener(on_failure=on_failure, on_response=on_response)
    raise TypeError(f"Not a listener: {value!r}")
