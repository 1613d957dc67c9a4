"""Lossless dictionary and JSON encoding for emails and bodies.

What:
  Convert :class:`~mailforge.core.email.Email` and
  :class:`~mailforge.core.body.Body` values to plain ``dict`` payloads (and
  JSON text) and back.

Why:
  Built emails need to be stored, queued, and inspected outside the process.
  The YAML message documents read by the CLI only describe the common
  shapes; they cannot carry raw bytes in another charset, ``multipart/mixed``
  bodies, or exact boundaries. This encoding round-trips every value the
  composition API can build.

How:
  Bodies are tagged by ``type`` (``text``, ``html``, ``multipart``). Leaf
  bodies carry base64 ``content`` plus ``charset``; multipart bodies carry the
  subtype, boundary, and parts, each part with a structured content type,
  optional transfer encoding, base64 content, and headers. Optional email
  fields are written only when present, so ``cc: []`` stays distinct from a
  missing ``cc``. Decoding rebuilds values through their constructors, so
  every invariant is checked again.

Interfaces:
  :func:`email_to_dict`, :func:`email_from_dict`, :func:`email_to_json`,
  :func:`email_from_json`, :func:`body_to_dict`, :func:`body_from_dict`.

Invariants & Safety:
  - ``email_from_dict(email_to_dict(e)) == e`` for every constructible email.
  - Malformed payloads raise :class:`~mailforge.errors.EmailDecodeError`;
    domain failures such as an empty ``to`` keep their own error type.
"""
from __future__ import annotations

import base64
import json
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from ..address import EmailAddress
from ..errors import EmailDecodeError, MailForgeError
from ..mime.headers import HeaderList
from ..mime.multipart import Boundary, BodyPart, Multipart, MultipartSubtype
from ..mime.types import Charset, ContentType, TransferEncoding
from .body import Body, BodyKind
from .email import Email


@contextmanager
def _decoding(what: str) -> Iterator[None]:
    try:
        yield
    except MailForgeError:
        raise
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise EmailDecodeError(f"Invalid {what} payload: {exc}") from exc


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _b64decode(value: str) -> bytes:
    return base64.b64decode(value.encode("ascii"), validate=True)


# -- headers and addresses -------------------------------------------------


def _headers_to_list(headers: HeaderList) -> List[Dict[str, str]]:
    return [{"name": header.name, "value": header.value} for header in headers]


def _headers_from_list(entries: Iterable[Mapping[str, str]]) -> HeaderList:
    return HeaderList((entry["name"], entry["value"]) for entry in entries)


def _address_to_value(address: EmailAddress) -> Any:
    # names stay unencoded here; formataddr would apply RFC 2047
    if address.display_name:
        return {"name": address.display_name, "address": address.address}
    return address.address


def _address_from_value(value: Any) -> EmailAddress:
    if isinstance(value, Mapping):
        return EmailAddress(value["address"], value.get("name"))
    return EmailAddress.parse(value)


def _addresses_from_value(values: Any) -> Optional[List[EmailAddress]]:
    if values is None:
        return None
    if isinstance(values, (str, Mapping)):
        values = [values]
    return [_address_from_value(value) for value in values]


# -- multipart ---------------------------------------------------------------


def _content_type_to_dict(content_type: ContentType) -> Dict[str, Any]:
    return {
        "type": content_type.type,
        "subtype": content_type.subtype,
        "parameters": dict(content_type.parameters),
    }


def _content_type_from_dict(payload: Mapping[str, Any]) -> ContentType:
    return ContentType(payload["type"], payload["subtype"], payload.get("parameters") or {})


def _part_to_dict(part: BodyPart) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"content_type": _content_type_to_dict(part.content_type)}
    if part.transfer_encoding is not None:
        payload["transfer_encoding"] = part.transfer_encoding.value
    payload["content"] = _b64encode(part.content)
    if len(part.headers):
        payload["headers"] = _headers_to_list(part.headers)
    return payload


def _part_from_dict(payload: Mapping[str, Any]) -> BodyPart:
    encoding = payload.get("transfer_encoding")
    return BodyPart(
        _content_type_from_dict(payload["content_type"]),
        _b64decode(payload["content"]),
        TransferEncoding(encoding) if encoding is not None else None,
        _headers_from_list(payload.get("headers", ())),
    )


def _multipart_to_dict(multipart: Multipart) -> Dict[str, Any]:
    return {
        "subtype": multipart.subtype.value,
        "boundary": multipart.boundary.value,
        "parts": [_part_to_dict(part) for part in multipart.parts],
    }


def _multipart_from_dict(payload: Mapping[str, Any]) -> Multipart:
    return Multipart(
        MultipartSubtype(payload["subtype"]),
        tuple(_part_from_dict(part) for part in payload["parts"]),
        Boundary(payload["boundary"]),
    )


# -- public API --------------------------------------------------------------


def body_to_dict(body: Body) -> Dict[str, Any]:
    """Encode ``body`` as a ``type``-tagged mapping."""

    if body.kind in (BodyKind.TEXT, BodyKind.HTML):
        return {
            "type": body.kind.value,
            "content": _b64encode(body.payload),
            "charset": body.charset.raw_value,
        }
    if body.kind is BodyKind.MULTIPART:
        return {"type": body.kind.value, "multipart": _multipart_to_dict(body.parts)}
    raise AssertionError(f"unhandled body kind {body.kind!r}")


def body_from_dict(payload: Mapping[str, Any]) -> Body:
    """Decode a mapping produced by :func:`body_to_dict`.

    Raises:
      EmailDecodeError: If the payload is malformed.
      MultipartError: If the decoded multipart fails validation.
    """

    with _decoding("body"):
        kind = BodyKind(payload["type"])
        if kind is BodyKind.MULTIPART:
            return Body.multipart(_multipart_from_dict(payload["multipart"]))
        return Body(kind, _b64decode(payload["content"]), Charset(payload["charset"]))


def email_to_dict(email: Email) -> Dict[str, Any]:
    """Encode ``email``; optional fields appear only when set."""

    payload: Dict[str, Any] = {
        "to": [_address_to_value(address) for address in email.to],
        "from": _address_to_value(email.from_),
    }
    if email.reply_to is not None:
        payload["reply_to"] = _address_to_value(email.reply_to)
    if email.cc is not None:
        payload["cc"] = [_address_to_value(address) for address in email.cc]
    if email.bcc is not None:
        payload["bcc"] = [_address_to_value(address) for address in email.bcc]
    payload["subject"] = email.subject
    payload["body"] = body_to_dict(email.body)
    if email.date is not None:
        payload["date"] = email.date.isoformat()
    payload["additional_headers"] = _headers_to_list(email.additional_headers)
    return payload


def email_from_dict(payload: Mapping[str, Any]) -> Email:
    """Decode a mapping produced by :func:`email_to_dict`.

    Raises:
      EmailDecodeError: If the payload is malformed.
      EmptyRecipientsError, AddressError, MultipartError: From the rebuilt
        values.
    """

    with _decoding("email"):
        subject = payload["subject"]
        if not isinstance(subject, str):
            raise TypeError(f"subject must be a string, got {type(subject).__name__}")
        reply_to = payload.get("reply_to")
        date = payload.get("date")
        return Email(
            to=_addresses_from_value(payload["to"]),
            from_=_address_from_value(payload["from"]),
            subject=subject,
            body=body_from_dict(payload["body"]),
            reply_to=_address_from_value(reply_to) if reply_to is not None else None,
            cc=_addresses_from_value(payload.get("cc")),
            bcc=_addresses_from_value(payload.get("bcc")),
            date=datetime.fromisoformat(date) if date is not None else None,
            additional_headers=_headers_from_list(payload.get("additional_headers", ())),
        )


def email_to_json(email: Email, *, indent: Optional[int] = None) -> str:
    return json.dumps(email_to_dict(email), indent=indent, ensure_ascii=False)


def email_from_json(text: str | bytes) -> Email:
    """Parse JSON text and delegate to :func:`email_from_dict`."""

    with _decoding("email"):
        payload = json.loads(text)
    return email_from_dict(payload)
