"""
Cryptographically Secure Random Source
=======================================

Uniform integer selection over ``[0, n)`` from the operating-system
CSPRNG.  Naive ``randint % n`` over a non-power-of-two range favours the
low residues; the source instead masks raw bytes down to the smallest
power-of-two range covering *n* and rejects draws that land outside it.
Each attempt succeeds with probability above one half.

References:
    - Lemire, D. (2019). Fast Random Integer Generation in an Interval.
      ACM Transactions on Modeling and Computer Simulation, 29(1).
    - NIST SP 800-90A Rev. 1 (2015), Appendix A.5.1 (simple discard).
"""

from __future__ import annotations

import os
from typing import Callable

from entropyforge.core.errors import EntropyFailure

ByteReader = Callable[[int], bytes]


class RandomSource:
    """Uniform integers backed by a byte-oriented entropy reader.

    Usage::

        source = RandomSource()
        face = source.uniform(6) + 1

    Args:
        read_bytes: Callable returning exactly *k* random bytes.  Defaults
            to :func:`os.urandom`.  Tests inject a seeded reader.
    """

    def __init__(self, read_bytes: ByteReader | None = None) -> None:
        self._read_bytes: ByteReader = read_bytes or os.urandom

    def uniform(self, n: int) -> int:
        """Return an integer uniformly distributed in ``[0, n)``.

        Args:
            n: Exclusive upper bound, at least 1.

        Returns:
            The drawn integer.

        Raises:
            ValueError: If ``n < 1``.
            EntropyFailure: If the entropy reader fails.
        """
        if n < 1:
            raise ValueError(f"Upper bound must be >= 1, got {n}")
        if n == 1:
            return 0

        bits = (n - 1).bit_length()
        nbytes = (bits + 7) // 8
        mask = (1 << bits) - 1
        while True:
            value = int.from_bytes(self._entropy(nbytes), "big") & mask
            if value < n:
                return value

    def _entropy(self, nbytes: int) -> bytes:
        try:
            raw = self._read_bytes(nbytes)
        except OSError as exc:
            raise EntropyFailure(f"Entropy source failed: {exc}") from exc
        if len(raw) != nbytes:
            raise EntropyFailure(
                f"Entropy source returned {len(raw)} of {nbytes} bytes"
            )
        return raw


_DEFAULT_SOURCE = RandomSource()


def default_source() -> RandomSource:
    """The process-wide source reading :func:`os.urandom`."""
    return _DEFAULT_SOURCE
