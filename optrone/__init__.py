__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'optrone'
__author__ = 'Optrone Contributors'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .templates import *
from .validator import *
from .tokens import *
from .records import *
from .matcher import *
from .collector import *
from .parser import *
from .faults import *
from .styling import *
from .preview import *
from .help import *

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

# Load the exposed API of the templates
__all__ += templates.__all__  # type: ignore[attr-defined]
# Load the exposed API of the validator
__all__ += validator.__all__  # type: ignore[attr-defined]
# Load the exposed API of the tokenizer
__all__ += tokens.__all__  # type: ignore[attr-defined]
# Load the exposed API of the records
__all__ += records.__all__  # type: ignore[attr-defined]
# Load the exposed API of the matcher
__all__ += matcher.__all__  # type: ignore[attr-defined]
# Load the exposed API of the collector
__all__ += collector.__all__  # type: ignore[attr-defined]
# Load the exposed API of the parser
__all__ += parser.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the style shorthands
__all__ += styling.__all__  # type: ignore[attr-defined]
# Load the exposed API of the previews
__all__ += preview.__all__  # type: ignore[attr-defined]
# Load the exposed API of the help messages
__all__ += help.__all__  # type: ignore[attr-defined]
