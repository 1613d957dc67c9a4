"""
Module: mailforge.__init__

What:
  Aggregate the public surface for composing emails as immutable values and
  projecting them into wire-ready RFC 5322 messages.

Why:
  Callers should build messages from one namespace without learning the
  internal split between composition (``core``), MIME primitives (``mime``),
  and transport projection (``wire``).

How:
  Re-export the composition API, the multipart factories, the wire projection
  entry point, and the error hierarchy. Configuration and the CLI stay in
  their own subpackages so importing the library does not pull in YAML or
  Typer.

Interfaces:
  - Email, Body, BodyKind: message composition.
  - alternative, mixed, random_boundary: multipart construction.
  - to_wire_message, WireMessage: wire projection.
  - email_to_dict / email_from_dict and friends: lossless serialisation.
  - EmailAddress and the MIME value types.
  - MailForgeError and its subclasses.
"""

from .address import EmailAddress
from .core import (
    Body,
    BodyKind,
    Email,
    alternative,
    body_from_dict,
    body_to_dict,
    email_from_dict,
    email_from_json,
    email_to_dict,
    email_to_json,
    mixed,
    random_boundary,
)
from .errors import (
    AddressConversionError,
    AddressError,
    BoundaryError,
    EmailDecodeError,
    EmptyRecipientsError,
    HeaderRenderError,
    MailForgeError,
    MultipartError,
)
from .mime import (
    TEXT_HTML_UTF8,
    TEXT_PLAIN_UTF8,
    UTF8,
    BodyPart,
    Boundary,
    Charset,
    ContentType,
    Header,
    HeaderList,
    Multipart,
    MultipartSubtype,
    TransferEncoding,
)
from .wire import WireMessage, to_wire_message

__all__ = [
    "Email",
    "Body",
    "BodyKind",
    "alternative",
    "mixed",
    "random_boundary",
    "email_to_dict",
    "email_from_dict",
    "email_to_json",
    "email_from_json",
    "body_to_dict",
    "body_from_dict",
    "to_wire_message",
    "WireMessage",
    "EmailAddress",
    "Charset",
    "UTF8",
    "ContentType",
    "TEXT_PLAIN_UTF8",
    "TEXT_HTML_UTF8",
    "TransferEncoding",
    "Header",
    "HeaderList",
    "Boundary",
    "BodyPart",
    "Multipart",
    "MultipartSubtype",
    "MailForgeError",
    "EmptyRecipientsError",
    "MultipartError",
    "BoundaryError",
    "AddressError",
    "AddressConversionError",
    "HeaderRenderError",
    "EmailDecodeError",
]
