"""Exception hierarchy shared by every mailforge component.

What:
  Define the error kinds surfaced by message composition, multipart
  construction, address handling, wire projection and rendering,
  serialisation, and configuration loading.

Why:
  Callers (including the CLI) need a single base class to separate expected
  composition failures from programming errors, while still being able to
  catch each failure kind precisely.

How:
  Root everything at :class:`MailForgeError`. Kinds that describe invalid input
  values also derive from :class:`ValueError` so generic validation handlers
  keep working.

Interfaces:
  :class:`MailForgeError`, :class:`EmptyRecipientsError`,
  :class:`MultipartError`, :class:`BoundaryError`, :class:`AddressError`,
  :class:`AddressConversionError`, :class:`HeaderRenderError`,
  :class:`EmailDecodeError`.
"""
from __future__ import annotations


class MailForgeError(Exception):
    """Base error for all mailforge failures."""


class EmptyRecipientsError(MailForgeError, ValueError):
    """Raised when an :class:`~mailforge.core.email.Email` has no ``to`` address."""

    def __init__(self, message: str = "Email must have at least one recipient in the 'to' field") -> None:
        super().__init__(message)


class MultipartError(MailForgeError, ValueError):
    """Raised when a multipart structure fails validation.

    Covers empty part lists and boundaries that collide with part content.
    """


class BoundaryError(MultipartError):
    """Raised when a boundary string violates RFC 2046 section 5.1.1."""


class AddressError(MailForgeError, ValueError):
    """Raised when an email address fails syntax validation."""


class AddressConversionError(MailForgeError):
    """Raised when an address cannot be converted to its wire form.

    Aborts the whole projection; no partial wire message is produced.
    """


class HeaderRenderError(MailForgeError, ValueError):
    """Raised when a header value cannot be written to the wire.

    Typical cause: a subject or header value containing CR or LF.
    """


class EmailDecodeError(MailForgeError, ValueError):
    """Raised when a serialised email or body payload is malformed."""
