"""Cryptographically strong random bytes for trace and span ids."""

from __future__ import annotations

import secrets

from edgetrace.errors import RandomSourceUnavailableError

TRACE_ID_BYTES = 16
SPAN_ID_BYTES = 8


class RandomSource:
    """Source of random bytes for trace and span ids."""

    def token_bytes(self, nbytes: int) -> bytes:
        raise NotImplementedError


class SecretsRandomSource(RandomSource):
    """Operating system CSPRNG via the secrets module. Safe for concurrent use."""

    def token_bytes(self, nbytes: int) -> bytes:
        try:
            return secrets.token_bytes(nbytes)
        except (OSError, NotImplementedError) as e:
            raise RandomSourceUnavailableError(
                "Cryptographic random source unavailable",
                {"nbytes": nbytes, "cause": repr(e)},
            ) from e


def random_id(source: RandomSource, nbytes: int) -> bytes:
    """
    Draw a non-zero id of nbytes from source.

    All-zero ids are invalid, so such a draw is discarded and repeated.
    """
    while True:
        value = source.token_bytes(nbytes)
        if len(value) != nbytes:
            raise RandomSourceUnavailableError(
                "Random source returned short read",
                {"expected": nbytes, "got": len(value)},
            )
        if any(value):
            return value
