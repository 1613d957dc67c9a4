"""Cryptographically random multipart boundaries.

What:
  Produce unique, RFC 2046 compliant boundary values for new multipart bodies.

Why:
  A boundary must never occur inside the parts it separates. A 128-bit random
  token makes collisions practically impossible without scanning content or
  keeping a registry of issued values.

How:
  Draw 16 bytes from the injectable random source, lower-case hex-encode them,
  and format ``----=_Part_<hex>`` (43 characters, well within the 70-character
  limit).

Interfaces:
  :func:`random_boundary`.

Invariants & Safety:
  - The fixed format always satisfies :class:`~mailforge.mime.Boundary`; a
    validation failure signals a bug in this module and surfaces as
    :class:`AssertionError`, never as a recoverable error.
"""
from __future__ import annotations

import secrets
from typing import Optional

from ..errors import BoundaryError
from ..mime.multipart import Boundary
from ..utils.ids import RandomSource

BOUNDARY_PREFIX = "----=_Part_"
BOUNDARY_ENTROPY_BYTES = 16


def random_boundary(random_bytes: Optional[RandomSource] = None) -> Boundary:
    """Return a new ``----=_Part_<32 hex>`` boundary.

    Args:
      random_bytes: Optional random source used by tests to pin the output;
        defaults to :func:`secrets.token_bytes`.
    """

    source = random_bytes or secrets.token_bytes
    token = source(BOUNDARY_ENTROPY_BYTES).hex()
    try:
        return Boundary(f"{BOUNDARY_PREFIX}{token}")
    except BoundaryError as exc:
        raise AssertionError(f"generated boundary violates RFC 2046: {exc}") from exc
