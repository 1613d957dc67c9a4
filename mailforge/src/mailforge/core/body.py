"""Email body content as a closed text / HTML / multipart variant.

What:
  Provide :class:`Body`, the immutable body value carried by
  :class:`~mailforge.core.email.Email`, and derive its MIME ``Content-Type``,
  ``Content-Transfer-Encoding``, rendered text, and raw bytes.

Why:
  The body decides which MIME headers a message needs. Deriving them from a
  single closed variant means headers and payload can never disagree, and
  adding a new kind forces every derivation to be revisited.

How:
  :class:`Body` is one frozen dataclass tagged with :class:`BodyKind`. Leaf
  kinds keep the raw bytes plus a charset; the multipart kind wraps a
  :class:`~mailforge.mime.Multipart`. Each derived property branches over all
  kinds and treats an unknown tag as an internal error.

Interfaces:
  :class:`BodyKind`, :class:`Body`.

Invariants & Safety:
  - Leaf bodies always carry exactly one charset and report ``7bit``; the
    stored bytes are never re-encoded.
  - Multipart bodies report no top-level transfer encoding.
  - :meth:`Body.render` never raises on undecodable bytes: invalid UTF-8
    sequences are replaced with U+FFFD (``errors="replace"``).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..mime.multipart import Multipart
from ..mime.types import UTF8, Charset, ContentType, TransferEncoding


class BodyKind(str, Enum):
    TEXT = "text"
    HTML = "html"
    MULTIPART = "multipart"


@dataclass(frozen=True)
class Body:
    """Closed body variant; build instances with the classmethod constructors."""

    kind: BodyKind
    payload: bytes = b""
    charset: Optional[Charset] = None
    parts: Optional[Multipart] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", BodyKind(self.kind))
        if self.kind is BodyKind.MULTIPART:
            if self.parts is None:
                raise ValueError("multipart body requires a Multipart value")
            if self.payload or self.charset is not None:
                raise ValueError("multipart body carries neither payload nor charset")
        else:
            if self.charset is None:
                raise ValueError(f"{self.kind.value} body requires a charset")
            if self.parts is not None:
                raise ValueError(f"{self.kind.value} body cannot wrap a Multipart")
            object.__setattr__(self, "payload", bytes(self.payload))

    # -- constructors -------------------------------------------------------

    @classmethod
    def text(cls, content: str, charset: Charset = UTF8) -> "Body":
        """Plain-text body from a string, stored as UTF-8 bytes."""

        return cls(BodyKind.TEXT, content.encode("utf-8"), charset)

    @classmethod
    def html(cls, content: str, charset: Charset = UTF8) -> "Body":
        """HTML body from a string, stored as UTF-8 bytes."""

        return cls(BodyKind.HTML, content.encode("utf-8"), charset)

    @classmethod
    def text_data(cls, content: bytes, charset: Charset = UTF8) -> "Body":
        return cls(BodyKind.TEXT, content, charset)

    @classmethod
    def html_data(cls, content: bytes, charset: Charset = UTF8) -> "Body":
        return cls(BodyKind.HTML, content, charset)

    @classmethod
    def multipart(cls, multipart: Multipart) -> "Body":
        return cls(BodyKind.MULTIPART, parts=multipart)

    @classmethod
    def coerce(cls, value: "Body | str") -> "Body":
        """Accept a :class:`Body` as-is and treat a bare string as plain text."""

        if isinstance(value, Body):
            return value
        if isinstance(value, str):
            return cls.text(value)
        raise TypeError(f"Expected Body or str, got {type(value).__name__}")

    # -- derived properties -------------------------------------------------

    @property
    def is_multipart(self) -> bool:
        return self.kind is BodyKind.MULTIPART

    @property
    def content_type(self) -> ContentType:
        if self.kind is BodyKind.TEXT:
            return ContentType.create("text", "plain", charset=self.charset.raw_value)
        if self.kind is BodyKind.HTML:
            return ContentType.create("text", "html", charset=self.charset.raw_value)
        if self.kind is BodyKind.MULTIPART:
            return self.parts.content_type
        raise AssertionError(f"unhandled body kind {self.kind!r}")

    @property
    def transfer_encoding(self) -> Optional[TransferEncoding]:
        if self.kind in (BodyKind.TEXT, BodyKind.HTML):
            return TransferEncoding.SEVEN_BIT
        if self.kind is BodyKind.MULTIPART:
            return None
        raise AssertionError(f"unhandled body kind {self.kind!r}")

    def render(self) -> str:
        """Return the body as text.

        Leaf bodies decode their bytes as UTF-8, replacing invalid sequences
        with U+FFFD. Multipart bodies return the full framed MIME text.
        """

        if self.kind in (BodyKind.TEXT, BodyKind.HTML):
            return self.payload.decode("utf-8", errors="replace")
        if self.kind is BodyKind.MULTIPART:
            return self.parts.render()
        raise AssertionError(f"unhandled body kind {self.kind!r}")

    @property
    def content(self) -> str:
        return self.render()

    @property
    def data(self) -> bytes:
        """Raw bytes: stored bytes for leaves, UTF-8 of :meth:`render` otherwise."""

        if self.kind in (BodyKind.TEXT, BodyKind.HTML):
            return self.payload
        if self.kind is BodyKind.MULTIPART:
            return self.render().encode("utf-8")
        raise AssertionError(f"unhandled body kind {self.kind!r}")
