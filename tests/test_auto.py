"""Tests for init()/stop_tracing() and the stage factories."""

import logging
import unittest

from edgetrace import edge_stage, get_tracer, init, server_stage, stop_tracing
from edgetrace.config import validate_config
from edgetrace.context import get_ids
from edgetrace.instrumentation import EdgeStage, ServerStage
from edgetrace.instrumentation.requests import is_patched
from edgetrace.processors import TraceIdsLogFilter
from edgetrace.tracer import SecureIdGenerator

HEADER = "00-dd19a611e9ecea7586020b7ec57566d0-5b34ec95e459d3f7-01"


class TestInit(unittest.TestCase):

    def tearDown(self):
        stop_tracing()

    def test_init_returns_provider(self):
        provider = init(service_name="checkout", log_correlation=False)
        self.assertIsNotNone(provider)
        self.assertEqual(provider.resource, {"service.name": "checkout"})
        self.assertIsInstance(provider.id_generator, SecureIdGenerator)

    def test_multiple_init_calls_idempotent_and_warn(self):
        log_capture = []
        handler = logging.Handler()
        handler.emit = lambda record: log_capture.append(record)
        handler.setLevel(logging.WARNING)
        logger = logging.getLogger("edgetrace.auto")
        logger.addHandler(handler)
        try:
            provider1 = init(log_correlation=False)
            provider2 = init(log_correlation=False)
            self.assertIs(provider2, provider1)
            self.assertTrue(any("already initialized" in r.getMessage() for r in log_capture))
        finally:
            logger.removeHandler(handler)

    def test_stop_tracing_allows_reinit(self):
        provider1 = init(log_correlation=False)
        stop_tracing()
        provider2 = init(log_correlation=False)
        self.assertIsNot(provider2, provider1)

    def test_patching_follows_config(self):
        init(enable_patching=True, log_correlation=False)
        self.assertTrue(is_patched())
        stop_tracing()
        self.assertFalse(is_patched())

        init(enable_patching=False, log_correlation=False)
        self.assertFalse(is_patched())

    def test_log_correlation_installed_on_root(self):
        root = logging.getLogger()
        handler = logging.NullHandler()
        root.addHandler(handler)
        try:
            init(enable_patching=False, log_correlation=True)
            self.assertTrue(any(isinstance(f, TraceIdsLogFilter) for f in handler.filters))
            stop_tracing()
            self.assertFalse(handler.filters)
        finally:
            root.removeHandler(handler)

    def test_get_tracer_initializes_lazily(self):
        tracer = get_tracer("lazy")
        with tracer.start_as_current_span("work"):
            self.assertNotEqual(get_ids().trace_id, "null")


class TestStageFactories(unittest.TestCase):

    def tearDown(self):
        stop_tracing()

    def test_edge_stage_from_config(self):
        config = validate_config({
            "stage_name": "gateway",
            "preserve_upstream": True,
            "matcher": "/api/.*",
        })
        stage = edge_stage(config)
        self.assertIsInstance(stage, EdgeStage)
        self.assertEqual(stage.name, "gateway")
        self.assertTrue(stage.preserve_upstream)
        self.assertTrue(stage.applies_to("/api/orders"))
        self.assertFalse(stage.applies_to("/"))

    def test_server_stage_uses_active_provider(self):
        init(enable_patching=False, log_correlation=False)
        stage = server_stage(validate_config({}))
        self.assertIsInstance(stage, ServerStage)
        with stage.enter("GET", "http://x/", {"traceparent": HEADER}) as ids:
            self.assertEqual(ids.trace_id, "dd19a611e9ecea7586020b7ec57566d0")


if __name__ == "__main__":
    unittest.main()
