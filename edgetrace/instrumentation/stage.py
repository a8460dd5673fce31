"""Capability shared by the edge and server stages.

An application picks one implementation per tier when it builds its
middleware stack; nothing inspects the environment at request time.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import ContextManager, MutableMapping, Optional

from edgetrace.tracer.trace_context import TraceIds

# Skips static assets, anything with a file extension and framework internals.
DEFAULT_MATCHER = r"/((?!static|.*\..*|_next).*)"


class Stage(ABC):
    """A request-handling tier that takes part in trace propagation."""

    def __init__(self, name: str, matcher: Optional[str] = None) -> None:
        self.name = name
        self.matcher = matcher
        self._pattern = re.compile(matcher) if matcher else None

    def applies_to(self, path: str) -> bool:
        """Whether requests for path go through this stage."""
        if self._pattern is None:
            return True
        return self._pattern.fullmatch(path) is not None

    @abstractmethod
    def enter(
        self,
        method: str,
        url: str,
        headers: MutableMapping[str, str],
    ) -> ContextManager[TraceIds]:
        """
        Run the stage for one request.

        headers may be updated in place and must be forwarded as modified.
        The context manager yields the ids in effect for the request.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, matcher={self.matcher!r})"
