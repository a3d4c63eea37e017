from __future__ import annotations

__all__ = [
    "__version__",
    "ActionListener",
    "Api",
    "ClientCategory",
    "ConfigurationError",
    "ConnectionSpec",
    "ConverterRegistry",
    "MissingArgumentError",
    "Operation",
    "OutputFormat",
    "ReflexError",
    "build_api",
    "generate_operation",
    "make_listener",
    "method_to_option_key",
    "using_client",
]

__version__ = "0.3.0"

from .api import Api, build_api  # noqa: E402
from .categories import ClientCategory  # noqa: E402
from .connection import ConnectionSpec, using_client  # noqa: E402
from .convert import ConverterRegistry, OutputFormat  # noqa: E402
from .errors import ConfigurationError, MissingArgumentError, ReflexError  # noqa: E402
from .listener import ActionListener, make_listener  # noqa: E402
from .naming import method_to_option_key  # noqa: E402
from .operation import Operation, generate_operation  # noqa: E402
