__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'switchyard'
__author__ = 'Eiko Reishin (影皇嶺臣)'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .commands import *
from .dispatch import *
from .faults import *
from .flags import *
from .registry import *
from .subcommands import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the built-in subcommands
__all__ += commands.__all__  # type: ignore[attr-defined]
# Load the exposed API of the dispatcher
__all__ += dispatch.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the flag sets
__all__ += flags.__all__  # type: ignore[attr-defined]
# Load the exposed API of the registry
__all__ += registry.__all__  # type: ignore[attr-defined]
# Load the exposed API of the subcommand contract
__all__ += subcommands.__all__  # type: ignore[attr-defined]
