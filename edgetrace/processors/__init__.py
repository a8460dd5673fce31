"""Log processing helpers."""

from edgetrace.processors.logging_processor import (
    TraceIdsLogFilter,
    install_log_correlation,
    uninstall_log_correlation,
)

__all__ = [
    "TraceIdsLogFilter",
    "install_log_correlation",
    "uninstall_log_correlation",
]
