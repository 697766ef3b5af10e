"""kemet — recursive file content search."""

__all__ = [
    "__version__",
    "SearchConfig",
    "parse_config",
    "run_search",
    "Scanner",
    "ScanState",
    "Match",
]
__version__ = "0.1.0"

from kemet.core.config import SearchConfig, parse_config  # noqa: E402, F401
from kemet.core.runner import run_search  # noqa: E402, F401
from kemet.core.scanner import Scanner  # noqa: E402, F401
from kemet.model.match import Match  # noqa: E402, F401
from kemet.model.scan_state import ScanState  # noqa: E402, F401
