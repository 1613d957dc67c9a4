"""Project a validated :class:`~mailforge.core.email.Email` into wire form.

What:
  Convert an email into a :class:`~mailforge.wire.message.WireMessage`:
  wire address types, a Message-ID, the forwarded header list, the date, and
  the raw body bytes.

Why:
  Composition and transport disagree on small but important details: the
  Message-ID is a dedicated field rather than a free-form header, Bcc belongs
  to the envelope and not the header block, and a message needs a date even
  when the author did not set one. This module is the only place those rules
  live.

How:
  Run a single-shot transform. Convert every address (any failure raises
  :class:`~mailforge.errors.AddressConversionError` and no message is built),
  reuse a caller-supplied ``Message-ID`` or generate ``<hex@from-domain>``,
  drop ``Message-ID`` from ``Email.all_headers``, stamp the date from the
  email or the injectable clock, and attach ``email.body.data``.

Interfaces:
  :func:`to_wire_message`.

Invariants & Safety:
  - Exactly one Message-ID travels with the message, never duplicated in the
    free-form headers.
  - Bcc addresses are forwarded to :attr:`WireMessage.bcc` for the envelope
    and never rendered.
  - Address conversion is the only failure source.
"""
from __future__ import annotations

from datetime import datetime, timezone
from email.errors import HeaderParseError
from email.headerregistry import Address
from typing import Callable, Iterable, Optional, Tuple

from ..address import EmailAddress
from ..core.email import MESSAGE_ID, Email
from ..errors import AddressConversionError
from ..utils.ids import RandomSource, new_message_id
from ..utils.logging import JsonLogger, get_logger
from .message import WireMessage

Clock = Callable[[], datetime]

_LOGGER = get_logger("mailforge.wire")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _wire_address(address: EmailAddress) -> Address:
    try:
        return Address(display_name=address.display_name or "", addr_spec=address.address)
    except (ValueError, HeaderParseError) as exc:
        raise AddressConversionError(
            f"Cannot convert {address.raw_value!r} to a wire address: {exc}"
        ) from exc


def _wire_addresses(addresses: Optional[Iterable[EmailAddress]]) -> Optional[Tuple[Address, ...]]:
    if addresses is None:
        return None
    return tuple(_wire_address(address) for address in addresses)


def to_wire_message(
    email: Email,
    *,
    clock: Optional[Clock] = None,
    random_bytes: Optional[RandomSource] = None,
    logger: Optional[JsonLogger] = None,
) -> WireMessage:
    """Convert ``email`` into a :class:`WireMessage`.

    Args:
      email: Validated email to project.
      clock: Date source used when ``email.date`` is ``None``; defaults to the
        current UTC time.
      random_bytes: Random source for the default Message-ID.
      logger: Structured logger; defaults to the ``mailforge.wire`` logger.

    Returns:
      The wire message. ``bcc`` is populated for the envelope only.

    Raises:
      AddressConversionError: If any address fails wire conversion.
    """

    log = logger or _LOGGER
    from_ = _wire_address(email.from_)
    to = _wire_addresses(email.to) or ()
    cc = _wire_addresses(email.cc)
    bcc = _wire_addresses(email.bcc)
    reply_to = _wire_address(email.reply_to) if email.reply_to is not None else None

    message_id = email.additional_headers.get(MESSAGE_ID)
    generated = message_id is None
    if message_id is None:
        message_id = new_message_id(email.from_.domain, random_bytes)

    headers = email.all_headers.without(MESSAGE_ID)
    date = email.date if email.date is not None else (clock or _utc_now)()

    log.debug(
        "projected",
        message_id=message_id,
        generated_message_id=generated,
        to=len(to),
        cc=len(cc or ()),
        bcc=len(bcc or ()),
        headers=len(headers),
    )
    return WireMessage(
        from_=from_,
        to=to,
        cc=cc,
        bcc=bcc,
        reply_to=reply_to,
        date=date,
        subject=email.subject,
        message_id=message_id,
        body=email.body.data,
        additional_headers=headers,
    )
