"""Shared fixtures for edgetrace tests."""

import re

import pytest
import requests

from edgetrace import stop_tracing
from edgetrace.tracer import TracerProvider
from edgetrace.utils import RandomSource

TRACEPARENT_RE = re.compile(r"^[0-9a-f]{2}-[0-9a-f]{32}-[0-9a-f]{16}-[0-9a-f]{2}$")


class FixedRandomSource(RandomSource):
    """Returns the given chunks in order."""

    def __init__(self, *chunks: bytes) -> None:
        self.chunks = list(chunks)
        self.calls = []

    def token_bytes(self, nbytes: int) -> bytes:
        self.calls.append(nbytes)
        return self.chunks.pop(0)


class RecordingAdapter(requests.adapters.BaseAdapter):
    """requests transport that records prepared requests instead of sending them."""

    def __init__(self) -> None:
        super().__init__()
        self.sent = []

    def send(self, request, **kwargs):
        self.sent.append(request)
        response = requests.Response()
        response.status_code = 200
        response.request = request
        response.url = request.url
        response._content = b""
        return response

    def close(self) -> None:
        pass


@pytest.fixture
def traceparent_re():
    return TRACEPARENT_RE


@pytest.fixture
def fixed_source():
    return FixedRandomSource


@pytest.fixture
def recording_session():
    adapter = RecordingAdapter()
    session = requests.Session()
    session.mount("http://downstream", adapter)
    yield session, adapter
    session.close()


@pytest.fixture
def provider():
    p = TracerProvider(resource={"service.name": "edgetrace-tests"})
    yield p
    p.shutdown()


@pytest.fixture
def tracer(provider):
    return provider.get_tracer("tests")


@pytest.fixture(autouse=True)
def _reset_tracing():
    yield
    stop_tracing()
