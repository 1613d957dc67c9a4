"""The validated email aggregate.

What:
  Provide :class:`Email`, the immutable value holding recipients, sender,
  subject, body, optional date, and free-form headers, plus the derived
  :attr:`Email.all_headers`.

Why:
  Message composition should fail as early as possible on the one invariant
  the aggregate owns (at least one ``to`` recipient) and otherwise stay a
  plain value that renderers and transports can consume without re-checking.

How:
  A frozen dataclass coerces its inputs (strings to
  :class:`~mailforge.address.EmailAddress`, bare strings to
  :class:`~mailforge.core.body.Body`, pairs to
  :class:`~mailforge.mime.HeaderList`) in ``__post_init__`` and raises
  :class:`~mailforge.errors.EmptyRecipientsError` on an empty ``to``.
  ``all_headers`` merges the body's MIME headers over the additional headers
  with an explicit case-insensitive ``set``.

Interfaces:
  :class:`Email`.

Invariants & Safety:
  - ``to`` is never empty.
  - ``cc``/``bcc`` keep ``None`` (absent) distinct from ``()`` (empty).
  - ``Content-Type`` and ``Content-Transfer-Encoding`` derived from the body
    always win over same-named additional headers; every other header keeps
    its order, casing, and duplicates.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional, Tuple

from ..address import EmailAddress
from ..errors import EmptyRecipientsError
from ..mime.headers import HeaderInput, HeaderList
from ..utils.ids import RandomSource
from .body import Body
from .factory import alternative

CONTENT_TYPE = "Content-Type"
CONTENT_TRANSFER_ENCODING = "Content-Transfer-Encoding"
MESSAGE_ID = "Message-ID"


def _address_tuple(values: Optional[Iterable[EmailAddress | str]]) -> Optional[Tuple[EmailAddress, ...]]:
    if values is None:
        return None
    if isinstance(values, (str, EmailAddress)):
        values = [values]
    return tuple(EmailAddress.coerce(value) for value in values)


@dataclass(frozen=True)
class Email:
    """A complete email message ready for wire projection.

    Attributes:
      to: Recipient addresses; must contain at least one entry.
      from_: Sender address.
      subject: Subject line.
      body: Body content; a bare ``str`` becomes a plain-text body.
      reply_to: Optional Reply-To address.
      cc: Optional carbon-copy addresses.
      bcc: Optional blind-copy addresses (envelope only, never rendered).
      date: Optional message date; ``None`` is stamped at projection time.
      additional_headers: Supplemental headers such as ``X-Mailer`` or
        ``List-Unsubscribe``. MIME headers are derived from ``body``.
    """

    to: Tuple[EmailAddress, ...]
    from_: EmailAddress
    subject: str
    body: Body
    reply_to: Optional[EmailAddress] = None
    cc: Optional[Tuple[EmailAddress, ...]] = None
    bcc: Optional[Tuple[EmailAddress, ...]] = None
    date: Optional[datetime] = None
    additional_headers: HeaderList = field(default_factory=HeaderList)

    def __post_init__(self) -> None:
        to = _address_tuple(self.to) or ()
        if not to:
            raise EmptyRecipientsError()
        object.__setattr__(self, "to", to)
        object.__setattr__(self, "from_", EmailAddress.coerce(self.from_))
        if self.reply_to is not None:
            object.__setattr__(self, "reply_to", EmailAddress.coerce(self.reply_to))
        object.__setattr__(self, "cc", _address_tuple(self.cc))
        object.__setattr__(self, "bcc", _address_tuple(self.bcc))
        object.__setattr__(self, "body", Body.coerce(self.body))
        object.__setattr__(self, "additional_headers", HeaderList.coerce(self.additional_headers))

    # -- convenience constructors -------------------------------------------

    @classmethod
    def with_text(
        cls,
        to: Iterable[EmailAddress | str],
        from_: EmailAddress | str,
        subject: str,
        text: str,
        *,
        date: Optional[datetime] = None,
        additional_headers: HeaderInput = None,
    ) -> "Email":
        """Plain-text email.

        Raises:
          EmptyRecipientsError: If ``to`` is empty.
        """

        return cls(
            to=to,
            from_=from_,
            subject=subject,
            body=Body.text(text),
            date=date,
            additional_headers=HeaderList.coerce(additional_headers),
        )

    @classmethod
    def with_html(
        cls,
        to: Iterable[EmailAddress | str],
        from_: EmailAddress | str,
        subject: str,
        html: str,
        *,
        date: Optional[datetime] = None,
        additional_headers: HeaderInput = None,
    ) -> "Email":
        """HTML-only email.

        Raises:
          EmptyRecipientsError: If ``to`` is empty.
        """

        return cls(
            to=to,
            from_=from_,
            subject=subject,
            body=Body.html(html),
            date=date,
            additional_headers=HeaderList.coerce(additional_headers),
        )

    @classmethod
    def with_alternative(
        cls,
        to: Iterable[EmailAddress | str],
        from_: EmailAddress | str,
        subject: str,
        text: str,
        html: str,
        *,
        date: Optional[datetime] = None,
        additional_headers: HeaderInput = None,
        random_bytes: Optional[RandomSource] = None,
    ) -> "Email":
        """Email carrying text and HTML versions as ``multipart/alternative``.

        Raises:
          EmptyRecipientsError: If ``to`` is empty.
          MultipartError: If the alternative body fails validation.
        """

        body = Body.multipart(alternative(text, html, random_bytes=random_bytes))
        return cls(
            to=to,
            from_=from_,
            subject=subject,
            body=body,
            date=date,
            additional_headers=HeaderList.coerce(additional_headers),
        )

    # -- derived ------------------------------------------------------------

    @property
    def all_headers(self) -> HeaderList:
        """Additional headers with the body's MIME headers set on top."""

        headers = self.additional_headers.set(CONTENT_TYPE, self.body.content_type.header_value)
        encoding = self.body.transfer_encoding
        if encoding is not None:
            headers = headers.set(CONTENT_TRANSFER_ENCODING, encoding.header_value)
        return headers

    def summary(self) -> str:
        """One-line description for debugging; never includes the body."""

        parts = [f"From: {self.from_.address}", f"To: {', '.join(a.address for a in self.to)}"]
        if self.reply_to is not None:
            parts.append(f"Reply-To: {self.reply_to.address}")
        if self.cc:
            parts.append(f"CC: {', '.join(a.address for a in self.cc)}")
        if self.bcc:
            parts.append(f"BCC: {', '.join(a.address for a in self.bcc)}")
        parts.append(f'Subject: "{self.subject}"')
        return " ".join(parts)
