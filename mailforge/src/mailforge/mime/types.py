"""MIME value types: charsets, content types, and transfer encodings."""
from __future__ import annotations

import base64
import quopri
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Tuple


# RFC 2045 section 5.1 ``tspecials``; values containing any of them are quoted.
_TSPECIALS = set('()<>@,;:\\"/[]?=')


@dataclass(frozen=True)
class Charset:
    """Character set label carried by leaf bodies (e.g. ``utf-8``)."""

    raw_value: str

    def __post_init__(self) -> None:
        if not self.raw_value or any(ch.isspace() for ch in self.raw_value):
            raise ValueError(f"Invalid charset label {self.raw_value!r}")

    def __str__(self) -> str:
        return self.raw_value


UTF8 = Charset("utf-8")


class TransferEncoding(str, Enum):
    """``Content-Transfer-Encoding`` mechanisms from RFC 2045 section 6."""

    SEVEN_BIT = "7bit"
    EIGHT_BIT = "8bit"
    BINARY = "binary"
    QUOTED_PRINTABLE = "quoted-printable"
    BASE64 = "base64"

    @property
    def header_value(self) -> str:
        return self.value

    def encode(self, data: bytes) -> bytes:
        """Apply the encoding to ``data``.

        Identity encodings return ``data`` unchanged; the payload must already
        satisfy their constraints.
        """

        if self is TransferEncoding.BASE64:
            return base64.encodebytes(data)
        if self is TransferEncoding.QUOTED_PRINTABLE:
            return quopri.encodestring(data)
        return data


def _quote(value: str) -> str:
    if value and not any(ch in _TSPECIALS or ch.isspace() for ch in value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass(frozen=True)
class ContentType:
    """A ``type/subtype`` pair with ordered parameters."""

    type: str
    subtype: str
    parameters: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", self.type.lower())
        object.__setattr__(self, "subtype", self.subtype.lower())
        params = self.parameters
        if isinstance(params, Mapping):
            params = params.items()
        object.__setattr__(self, "parameters", tuple((str(k).lower(), str(v)) for k, v in params))

    @classmethod
    def create(cls, type: str, subtype: str, **parameters: str) -> "ContentType":
        return cls(type, subtype, tuple(parameters.items()))

    @property
    def mime_type(self) -> str:
        return f"{self.type}/{self.subtype}"

    @property
    def params(self) -> Dict[str, str]:
        return dict(self.parameters)

    @property
    def header_value(self) -> str:
        """Render as a ``Content-Type`` header value."""

        rendered = [self.mime_type]
        rendered.extend(f"{name}={_quote(value)}" for name, value in self.parameters)
        return "; ".join(rendered)

    def __str__(self) -> str:
        return self.header_value


TEXT_PLAIN_UTF8 = ContentType.create("text", "plain", charset=UTF8.raw_value)
TEXT_HTML_UTF8 = ContentType.create("text", "html", charset=UTF8.raw_value)
