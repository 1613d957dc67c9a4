"""Wire-format RFC 5322 messages.

What:
  Provide :class:`WireMessage`, the transport-ready projection of an email,
  and render it to ``.eml`` bytes.

Why:
  Transports need two different views of a message: the envelope recipients
  (To, Cc, and Bcc) and the visible header block, which must never list Bcc.
  Keeping both on one immutable value lets a sender hand the bytes to an MTA
  and the recipient list to ``RCPT TO`` without re-deriving either.

How:
  Build a header-only :class:`email.message.EmailMessage` using the
  :data:`email.policy.SMTP` policy, which takes care of header folding,
  RFC 2047 encoding, and CRLF line endings. Append the body bytes with line
  endings normalised to CRLF. Additional headers that would duplicate a
  dedicated field, or exceed the policy's per-header limit, are skipped and
  logged.

Interfaces:
  :class:`WireMessage`.

Invariants & Safety:
  - ``Bcc`` never appears in the rendered header block.
  - Headers and body are separated by exactly one empty line.
  - Header values the policy rejects (CR or LF inside a value) raise
    :class:`~mailforge.errors.HeaderRenderError`; nothing is rendered.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from email import policy
from email.headerregistry import Address
from email.message import EmailMessage
from pathlib import Path
from typing import List, Optional, Tuple

from ..errors import HeaderRenderError
from ..mime.headers import HeaderList
from ..utils.logging import JsonLogger, get_logger

DEDICATED_HEADERS = frozenset(
    {"from", "to", "cc", "bcc", "reply-to", "date", "subject", "message-id", "mime-version"}
)
_LINE_BREAK = re.compile(rb"\r\n|\r|\n")
_LOGGER = get_logger("mailforge.wire")


@dataclass(frozen=True)
class WireMessage:
    """A message in wire form: typed header fields plus raw body bytes.

    Attributes:
      from_: Sender.
      to: Visible primary recipients.
      date: Value of the ``Date`` header.
      subject: Value of the ``Subject`` header.
      message_id: Value of the ``Message-ID`` header, angle brackets included.
      body: Raw body bytes, already MIME-rendered for multipart bodies.
      cc: Visible carbon-copy recipients.
      bcc: Blind recipients, for the transport envelope only.
      reply_to: Reply-To address.
      additional_headers: Remaining headers, MIME headers included.
    """

    from_: Address
    to: Tuple[Address, ...]
    date: datetime
    subject: str
    message_id: str
    body: bytes
    cc: Optional[Tuple[Address, ...]] = None
    bcc: Optional[Tuple[Address, ...]] = None
    reply_to: Optional[Address] = None
    additional_headers: HeaderList = field(default_factory=HeaderList)

    def envelope_recipients(self) -> List[str]:
        """Addr-specs of every recipient (to, cc, bcc) in that order."""

        recipients = [address.addr_spec for address in self.to]
        recipients.extend(address.addr_spec for address in self.cc or ())
        recipients.extend(address.addr_spec for address in self.bcc or ())
        return recipients

    def header_message(self, logger: Optional[JsonLogger] = None) -> EmailMessage:
        """Return a header-only :class:`EmailMessage` for the visible header block.

        Raises:
          HeaderRenderError: If the policy rejects a header value, e.g. one
            containing CR or LF.
        """

        message = EmailMessage(policy=policy.SMTP)
        try:
            self._fill_headers(message, logger or _LOGGER)
        except ValueError as exc:
            raise HeaderRenderError(f"Cannot render header block: {exc}") from exc
        message.set_payload("")
        return message

    def _fill_headers(self, message: EmailMessage, log: JsonLogger) -> None:
        message["From"] = self.from_
        message["To"] = self.to
        if self.cc:
            message["Cc"] = self.cc
        if self.reply_to is not None:
            message["Reply-To"] = self.reply_to
        message["Date"] = self.date
        message["Subject"] = self.subject
        message["Message-ID"] = self.message_id
        message["MIME-Version"] = "1.0"
        for header in self.additional_headers:
            name = header.name.strip()
            if name.lower() in DEDICATED_HEADERS:
                log.warning("header_skipped", header=name, reason="dedicated_field")
                continue
            limit = message.policy.header_max_count(name)
            if limit is not None and len(message.get_all(name, [])) >= limit:
                log.warning("header_skipped", header=name, reason="max_count")
                continue
            message[name] = header.value

    def as_bytes(self, logger: Optional[JsonLogger] = None) -> bytes:
        """Render the complete message: folded headers, empty line, CRLF body."""

        header_block = self.header_message(logger).as_bytes()
        return header_block + _LINE_BREAK.sub(b"\r\n", self.body)

    def render(self) -> str:
        return self.as_bytes().decode("utf-8", errors="replace")

    def write_eml(self, path: Path | str) -> Path:
        """Write :meth:`as_bytes` to ``path`` and return it as a :class:`Path`."""

        target = Path(path)
        target.write_bytes(self.as_bytes())
        return target
