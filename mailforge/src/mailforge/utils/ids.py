"""Generate Message-IDs and stable checksums for mailforge artifacts.

What:
  Provide helpers for default ``Message-ID`` values and SHA-256 checksums of
  rendered messages.

Why:
  Message-IDs must be globally unique and unpredictable; checksums let the CLI
  report exactly which ``.eml`` bytes it wrote.

How:
  Draw 16 bytes from an injectable random source (``secrets.token_bytes`` by
  default), hex-encode them as the local part, and wrap ``hashlib`` with a
  ``sha256:`` prefix for checksums.

Interfaces:
  :data:`RandomSource`, :func:`new_message_id`, :func:`checksum`.

Invariants & Safety:
  - Message-IDs always have the form ``<32-lower-hex@domain>``.
  - Checksums are namespaced with ``sha256:`` so future algorithms can coexist.
"""
from __future__ import annotations

import hashlib
import secrets
from typing import Callable, Optional

RandomSource = Callable[[int], bytes]
"""Callable returning ``n`` cryptographically random bytes."""

MESSAGE_ID_ENTROPY_BYTES = 16


def new_message_id(domain: str, random_bytes: Optional[RandomSource] = None) -> str:
    """Return a fresh ``<local@domain>`` Message-ID.

    Args:
      domain: Right-hand side, normally the sender's domain.
      random_bytes: Optional random source; defaults to
        :func:`secrets.token_bytes`.

    Returns:
      Message-ID string including the angle brackets.
    """

    source = random_bytes or secrets.token_bytes
    local = source(MESSAGE_ID_ENTROPY_BYTES).hex()
    return f"<{local}@{domain}>"


def checksum(data: bytes) -> str:
    """Compute a namespaced SHA-256 digest for ``data``."""

    return f"sha256:{hashlib.sha256(data).hexdigest()}"
