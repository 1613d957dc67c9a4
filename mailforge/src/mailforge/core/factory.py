"""Factories for the common multipart shapes.

What:
  Build ``multipart/alternative`` (text + HTML) and ``multipart/mixed``
  bodies with freshly generated boundaries.

Why:
  Nearly every outgoing email is one of these two shapes. Keeping part order
  and boundary generation in one place stops callers from putting HTML before
  text, which would make readers prefer the plain version.

How:
  Assemble the part tuple, draw a boundary from
  :func:`~mailforge.core.boundary.random_boundary`, and let
  :class:`~mailforge.mime.Multipart` validate the result.

Interfaces:
  :func:`alternative`, :func:`mixed`.

Invariants & Safety:
  - ``alternative`` always yields exactly two parts: text/plain first,
    text/html second, both UTF-8 and 7bit.
  - ``mixed`` preserves the caller's part order.
  - Validation errors from :class:`~mailforge.mime.Multipart` propagate
    unchanged as :class:`~mailforge.errors.MultipartError`.
"""
from __future__ import annotations

from typing import Iterable, Optional

from ..mime.multipart import BodyPart, Multipart, MultipartSubtype
from ..mime.types import TEXT_HTML_UTF8, TEXT_PLAIN_UTF8, TransferEncoding
from ..utils.ids import RandomSource
from .boundary import random_boundary


def alternative(
    text_content: str,
    html_content: str,
    *,
    random_bytes: Optional[RandomSource] = None,
) -> Multipart:
    """Create a ``multipart/alternative`` body from text and HTML versions.

    Readers display the last alternative they understand, so the HTML part
    follows the plain-text part.

    Raises:
      MultipartError: If the multipart fails validation.
    """

    parts = (
        BodyPart.text(text_content, TEXT_PLAIN_UTF8, TransferEncoding.SEVEN_BIT),
        BodyPart.html(html_content, TEXT_HTML_UTF8, TransferEncoding.SEVEN_BIT),
    )
    return Multipart(MultipartSubtype.ALTERNATIVE, parts, random_boundary(random_bytes))


def mixed(
    parts: Iterable[BodyPart],
    *,
    random_bytes: Optional[RandomSource] = None,
) -> Multipart:
    """Create a ``multipart/mixed`` body keeping ``parts`` in order.

    Raises:
      MultipartError: If the multipart fails validation (e.g. no parts).
    """

    return Multipart(MultipartSubtype.MIXED, tuple(parts), random_boundary(random_bytes))
