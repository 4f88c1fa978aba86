__version__ = "0.4.0"

from . import models  # noqa: E402
from .config import ConfigStore, load_baseline, resolve  # noqa: E402
from .credentials import extract_fragment  # noqa: E402
from .dispatcher import RequestDispatcher  # noqa: E402
from .errors import classify  # noqa: E402
from .server import MinimaxMcpServer  # noqa: E402
from .tools import ToolRegistry, ToolSpec, default_registry  # noqa: E402

__all__ = [
    "ConfigStore",
    "MinimaxMcpServer",
    "RequestDispatcher",
    "ToolRegistry",
    "ToolSpec",
    "classify",
    "default_registry",
    "extract_fragment",
    "load_baseline",
    "models",
    "resolve",
    "__version__",
]
