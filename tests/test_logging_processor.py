"""Tests for stamping log records with trace ids."""

import io
import logging

from edgetrace.processors import (
    TraceIdsLogFilter,
    install_log_correlation,
    uninstall_log_correlation,
)


def _make_logger(name):
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s trace=%(trace_id)s span=%(span_id)s"))
    logger = logging.getLogger(name)
    logger.handlers = [handler]
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger, stream


def test_filter_outside_span_uses_null():
    logger, stream = _make_logger("edgetrace.tests.null")
    install_log_correlation(logger)
    logger.info("hello")
    assert stream.getvalue().strip() == "hello trace=null span=null"


def test_filter_inside_span(tracer):
    logger, stream = _make_logger("edgetrace.tests.span")
    install_log_correlation(logger)
    with tracer.start_as_current_span("work") as span:
        ctx = span.get_span_context()
        logger.info("rendering")
    line = stream.getvalue().strip()
    assert f"trace={ctx.trace_id:032x}" in line
    assert f"span={ctx.span_id:016x}" in line


def test_install_is_idempotent_and_reversible():
    logger, _ = _make_logger("edgetrace.tests.idempotent")
    install_log_correlation(logger)
    install_log_correlation(logger)
    handler = logger.handlers[0]
    assert sum(isinstance(f, TraceIdsLogFilter) for f in handler.filters) == 1

    uninstall_log_correlation(logger)
    assert not handler.filters


def test_logger_without_handlers_gets_filter():
    logger = logging.getLogger("edgetrace.tests.bare")
    logger.handlers = []
    install_log_correlation(logger)
    try:
        assert any(isinstance(f, TraceIdsLogFilter) for f in logger.filters)
    finally:
        uninstall_log_correlation(logger)


def test_logger_level_filter_stamps_records_logged_on_it(tracer):
    parent, stream = _make_logger("edgetrace.tests.tree")
    bare = logging.getLogger("edgetrace.tests.tree.bare")
    bare.handlers = []
    install_log_correlation(bare)
    try:
        with tracer.start_as_current_span("op") as span:
            bare.info("from bare")
            ctx = span.get_span_context()
        # the record reaches the parent's handler already stamped
        line = stream.getvalue().strip()
        assert line == f"from bare trace={ctx.trace_id:032x} span={ctx.span_id:016x}"
    finally:
        uninstall_log_correlation(bare)
        parent.handlers = []
