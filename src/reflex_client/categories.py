from __future__ import annotations

from enum import Enum
from typing import Any


class ClientCategory(str, Enum):
    CORE = "core"
    INDICES = "indices"
    CLUSTER = "cluster"

    @property
    def accessor_path(self) -> tuple[str, ...]:
        return _ACCESSOR_PATHS[self]

    def resolve(self, handle: Any) -> Any:
        """Navigate from a root client handle to this category's sub-client."""
        target = handle
        for accessor in self.accessor_path:
            attr = getattr(target, accessor)
            target = attr() if callable(attr) else attr
        return target

    @classmethod
    def parse(cls, value: "ClientCategory | str") -> "ClientCategory":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            allowed = ", ".join(c.value for c in cls)
            raise ValueError(f"Unsupported client category: {value!r} (expected one of {allowed})") from None


_ACCESSOR_PATHS: dict[ClientCategory, tuple[str, ...]] = {
    ClientCategory.CORE: (),
    ClientCategory.INDICES: ("admin", "indices"),
    ClientCategory.CLUSTER: ("admin", "cluster"),
}
