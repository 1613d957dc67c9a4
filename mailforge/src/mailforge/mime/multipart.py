"""RFC 2046 multipart structures and their text rendering.

What:
  Define :class:`Boundary`, :class:`BodyPart`, :class:`MultipartSubtype`, and
  :class:`Multipart`, the building blocks for ``multipart/*`` bodies.

Why:
  Multipart bodies must frame every part with a delimiter that never appears
  inside part content and must close with a terminal delimiter. Validating
  this once when the structure is built means rendering can never fail later.

How:
  :class:`Boundary` checks the RFC 2046 section 5.1.1 grammar (1-70
  ``bchars``, no trailing space). :class:`Multipart` checks that it holds at
  least one part and that no encoded part contains ``--<boundary>``.
  :meth:`Multipart.render` writes each part as ``--boundary``, part headers, an
  empty line, and the encoded content. It ends with ``--boundary--``. All lines
  end in CRLF.

Interfaces:
  :class:`Boundary`, :class:`BodyPart`, :class:`MultipartSubtype`,
  :class:`Multipart`.

Invariants & Safety:
  - A constructed :class:`Multipart` always renders; validation raises
    :class:`~mailforge.errors.MultipartError` up front.
  - Part order is preserved exactly as supplied.
"""
from __future__ import annotations

import re
import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Tuple

from ..errors import BoundaryError, MultipartError
from .headers import HeaderInput, HeaderList
from .types import TEXT_HTML_UTF8, TEXT_PLAIN_UTF8, ContentType, TransferEncoding

CRLF = "\r\n"
_BCHARS = set(string.ascii_letters + string.digits + "'()+_,-./:=? ")
_LINE_BREAK = re.compile(rb"\r\n|\r|\n")
_MIME_HEADERS = {"content-type", "content-transfer-encoding"}


def _to_crlf(data: bytes) -> bytes:
    return _LINE_BREAK.sub(b"\r\n", data)


@dataclass(frozen=True)
class Boundary:
    """A validated multipart boundary string."""

    value: str

    def __post_init__(self) -> None:
        if not 1 <= len(self.value) <= 70:
            raise BoundaryError(f"Boundary must be 1-70 characters, got {len(self.value)}")
        if self.value.endswith(" "):
            raise BoundaryError("Boundary must not end with a space")
        illegal = sorted(set(self.value) - _BCHARS)
        if illegal:
            raise BoundaryError(f"Boundary contains illegal characters: {''.join(illegal)!r}")

    @property
    def delimiter(self) -> str:
        return f"--{self.value}"

    def __str__(self) -> str:
        return self.value


class MultipartSubtype(str, Enum):
    MIXED = "mixed"
    ALTERNATIVE = "alternative"
    RELATED = "related"


@dataclass(frozen=True)
class BodyPart:
    """One entity inside a multipart body.

    ``content`` holds the unencoded bytes; :attr:`encoded_content` applies the
    transfer encoding. Nested multiparts carry no transfer encoding.
    """

    content_type: ContentType
    content: bytes
    transfer_encoding: Optional[TransferEncoding] = TransferEncoding.SEVEN_BIT
    headers: HeaderList = field(default_factory=HeaderList)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", HeaderList.coerce(self.headers))

    @classmethod
    def text(
        cls,
        text: str,
        content_type: ContentType = TEXT_PLAIN_UTF8,
        transfer_encoding: TransferEncoding = TransferEncoding.SEVEN_BIT,
    ) -> "BodyPart":
        return cls(content_type, text.encode("utf-8"), transfer_encoding)

    @classmethod
    def html(
        cls,
        html: str,
        content_type: ContentType = TEXT_HTML_UTF8,
        transfer_encoding: TransferEncoding = TransferEncoding.SEVEN_BIT,
    ) -> "BodyPart":
        return cls(content_type, html.encode("utf-8"), transfer_encoding)

    @classmethod
    def binary(
        cls,
        data: bytes,
        content_type: ContentType,
        *,
        filename: Optional[str] = None,
        headers: HeaderInput = None,
    ) -> "BodyPart":
        """Generic base64 part, marked as an attachment when ``filename`` is set."""

        extra = HeaderList.coerce(headers)
        if filename is not None:
            extra = extra.set("Content-Disposition", f'attachment; filename="{filename}"')
        return cls(content_type, data, TransferEncoding.BASE64, extra)

    @classmethod
    def multipart(cls, multipart: "Multipart") -> "BodyPart":
        return cls(multipart.content_type, multipart.render().encode("utf-8"), None)

    @property
    def encoded_content(self) -> bytes:
        if self.transfer_encoding is None:
            return self.content
        return self.transfer_encoding.encode(self.content)

    def header_list(self) -> HeaderList:
        headers = HeaderList().set("Content-Type", self.content_type.header_value)
        if self.transfer_encoding is not None:
            headers = headers.set("Content-Transfer-Encoding", self.transfer_encoding.header_value)
        for header in self.headers:
            if header.name.strip().lower() in _MIME_HEADERS:
                continue
            headers = headers.append(header.name, header.value)
        return headers


@dataclass(frozen=True)
class Multipart:
    """An ordered ``multipart/<subtype>`` body."""

    subtype: MultipartSubtype
    parts: Tuple[BodyPart, ...]
    boundary: Boundary

    def __post_init__(self) -> None:
        object.__setattr__(self, "subtype", MultipartSubtype(self.subtype))
        parts = tuple(self.parts)
        object.__setattr__(self, "parts", parts)
        if not parts:
            raise MultipartError(f"multipart/{self.subtype.value} requires at least one part")
        delimiter = self.boundary.delimiter.encode("ascii")
        for index, part in enumerate(parts):
            if delimiter in part.encoded_content:
                raise MultipartError(f"Boundary {self.boundary.value!r} occurs inside part {index}")

    @classmethod
    def of(
        cls,
        subtype: MultipartSubtype | str,
        parts: Iterable[BodyPart],
        boundary: Boundary,
    ) -> "Multipart":
        return cls(MultipartSubtype(subtype), tuple(parts), boundary)

    @property
    def content_type(self) -> ContentType:
        return ContentType.create("multipart", self.subtype.value, boundary=self.boundary.value)

    def render(self) -> str:
        """Render the framed multipart body text."""

        chunks = []
        for part in self.parts:
            chunks.append(self.boundary.delimiter + CRLF)
            for header in part.header_list():
                chunks.append(f"{header.name}: {header.value}{CRLF}")
            chunks.append(CRLF)
            chunks.append(_to_crlf(part.encoded_content).decode("utf-8", errors="replace"))
            chunks.append(CRLF)
        chunks.append(f"{self.boundary.delimiter}--{CRLF}")
        return "".join(chunks)
