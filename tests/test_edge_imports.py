"""The edge stage and the codec must load without OpenTelemetry."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parent.parent

_LIST_OTEL_MODULES = (
    "import sys\n"
    "{imports}\n"
    "print(','.join(sorted(m for m in sys.modules if m.startswith('opentelemetry'))))\n"
)


def _otel_modules_after(imports):
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")]))
    result = subprocess.run(
        [sys.executable, "-c", _LIST_OTEL_MODULES.format(imports=imports)],
        capture_output=True,
        text=True,
        env=env,
        check=True,
    )
    return [m for m in result.stdout.strip().split(",") if m]


@pytest.mark.parametrize(
    "imports",
    [
        "import edgetrace.context.propagators, edgetrace.instrumentation.edge",
        "from edgetrace import EdgeStage, format_traceparent, generate_trace_context",
        "from edgetrace.instrumentation import EdgeStage\n"
        "with EdgeStage().enter('GET', 'http://x/', {}) as ids: pass",
    ],
)
def test_edge_path_does_not_load_opentelemetry(imports):
    assert _otel_modules_after(imports) == []


def test_server_path_loads_opentelemetry():
    assert "opentelemetry.sdk.trace" in _otel_modules_after("from edgetrace import ServerStage, init")
