"""Pydantic models describing mailforge configuration and message documents."""
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..core.body import Body
from ..core.email import Email
from ..core.factory import alternative
from ..mime.headers import HeaderList
from ..mime.types import Charset


class ComposeSettings(BaseModel):
    """Defaults applied when the CLI composes messages.

    ``default_charset`` labels single text or HTML bodies only. Documents with
    both ``text`` and ``html`` become ``multipart/alternative`` bodies whose
    parts are always UTF-8, whatever this setting says.
    """

    model_config = ConfigDict(extra="forbid")

    default_charset: str = "utf-8"
    mailer: Optional[str] = "mailforge"

    @field_validator("default_charset")
    @classmethod
    def _validate_charset(cls, value: str) -> str:
        Charset(value)
        return value


class LoggingSettings(BaseModel):
    """Threshold for structured and CLI logging."""

    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARN", "ERROR"] = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.upper()
            return "WARN" if value == "WARNING" else value
        return value


class RuntimeConfig(BaseModel):
    """Root configuration loaded from ``mailforge.yaml``."""

    model_config = ConfigDict(extra="forbid")

    version: int = 1
    compose: ComposeSettings = Field(default_factory=ComposeSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


class HeaderEntry(BaseModel):
    """One ``name: value`` pair of a message document."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    value: str


class MessageDocument(BaseModel):
    """YAML description of a single message consumed by the CLI.

    At least one of ``text`` and ``html`` must be present; both together
    produce a ``multipart/alternative`` body.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    to: List[str] = Field(min_length=1)
    from_: str = Field(alias="from")
    reply_to: Optional[str] = None
    cc: Optional[List[str]] = None
    bcc: Optional[List[str]] = None
    subject: str = ""
    text: Optional[str] = None
    html: Optional[str] = None
    date: Optional[datetime] = None
    headers: List[HeaderEntry] = Field(default_factory=list)

    @field_validator("to", "cc", "bcc", mode="before")
    @classmethod
    def _listify(cls, value: object) -> object:
        if isinstance(value, str):
            return [value]
        return value

    @model_validator(mode="after")
    def _require_content(self) -> "MessageDocument":
        if self.text is None and self.html is None:
            raise ValueError("message document needs 'text', 'html', or both")
        return self

    def header_list(self) -> HeaderList:
        return HeaderList((entry.name, entry.value) for entry in self.headers)

    def to_email(self, charset: str = "utf-8", mailer: Optional[str] = None) -> Email:
        """Build the :class:`Email` this document describes.

        ``charset`` labels a text-only or HTML-only body. When both are
        present the alternative parts are always UTF-8 and ``charset`` is not
        used. ``mailer`` adds an ``X-Mailer`` header unless the document
        already sets one.

        Raises:
          EmptyRecipientsError, AddressError, MultipartError: From composition.
        """

        headers = self.header_list()
        if mailer and "X-Mailer" not in headers:
            headers = headers.append("X-Mailer", mailer)
        common = dict(
            to=self.to,
            from_=self.from_,
            reply_to=self.reply_to,
            cc=self.cc,
            bcc=self.bcc,
            subject=self.subject,
            date=self.date,
            additional_headers=headers,
        )
        if self.text is not None and self.html is not None:
            return Email(body=Body.multipart(alternative(self.text, self.html)), **common)
        label = Charset(charset)
        if self.html is not None:
            return Email(body=Body.html(self.html, label), **common)
        return Email(body=Body.text(self.text, label), **common)
