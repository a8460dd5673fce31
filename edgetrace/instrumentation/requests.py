"""Patch requests so outbound calls carry the active traceparent."""

from __future__ import annotations

import functools

import requests

from edgetrace.instrumentation.http_client import inject_headers

_original_send = None


def patch_requests() -> None:
    """
    Wrap requests.Session.send to inject traceparent from the current span.

    Calling it again while patched is a no-op.
    """
    global _original_send
    if _original_send is not None:
        return

    original = requests.Session.send

    @functools.wraps(original)
    def send(self, request, **kwargs):
        inject_headers(request.headers)
        return original(self, request, **kwargs)

    requests.Session.send = send
    _original_send = original


def unpatch_requests() -> None:
    """Restore the original requests.Session.send."""
    global _original_send
    if _original_send is None:
        return
    requests.Session.send = _original_send
    _original_send = None


def is_patched() -> bool:
    return _original_send is not None
