"""Stamp log records with the ids of the active span."""

from __future__ import annotations

import logging
from typing import Optional

from edgetrace.context.context import get_ids


class TraceIdsLogFilter(logging.Filter):
    """
    Adds trace_id and span_id attributes to every record it sees.

    Outside an active span both are "null", so format strings such as
    "%(trace_id)s" never fail.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        ids = get_ids()
        record.trace_id = ids.trace_id
        record.span_id = ids.span_id
        return True


def _has_filter(filterer: logging.Filterer) -> bool:
    return any(isinstance(f, TraceIdsLogFilter) for f in filterer.filters)


def install_log_correlation(logger: Optional[logging.Logger] = None) -> TraceIdsLogFilter:
    """
    Attach a TraceIdsLogFilter to logger's handlers (the root logger by default).

    A logger without handlers gets the filter itself. Logger-level filters
    only run for records logged on that logger, not for records propagated
    from its children, so install on a logger that has handlers (the root,
    usually) to cover a whole tree. Safe to call repeatedly.
    """
    logger = logger or logging.getLogger()
    log_filter = TraceIdsLogFilter()
    targets = list(logger.handlers) or [logger]
    for target in targets:
        if not _has_filter(target):
            target.addFilter(log_filter)
    return log_filter


def uninstall_log_correlation(logger: Optional[logging.Logger] = None) -> None:
    """Remove every TraceIdsLogFilter from logger and its handlers."""
    logger = logger or logging.getLogger()
    for target in [logger, *logger.handlers]:
        for f in [f for f in target.filters if isinstance(f, TraceIdsLogFilter)]:
            target.removeFilter(f)
