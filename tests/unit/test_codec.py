"""
Module: tests/unit/test_codec.py

What:
    Exercise the dictionary and JSON encoding in :mod:`mailforge.core.codec`
    for text, HTML, and multipart emails, and the decode failure paths.

Why:
    Serialised emails are queued and reloaded later. A field dropped or
    re-encoded on the way changes what the recipient finally receives, and a
    malformed payload must fail with a typed error rather than a stray
    ``KeyError``.

How:
    Build emails through the public constructors, encode them, decode the
    result, and compare with the original value. Payload shapes are checked
    where readers outside Python depend on them.

Interfaces:
    test_text_email_round_trip, test_html_email_round_trip,
    test_multipart_email_round_trip, test_non_utf8_leaf_round_trip,
    test_optional_fields_only_when_present, test_empty_cc_kept_apart_from_missing,
    test_display_name_is_stored_unencoded, test_malformed_payloads,
    test_empty_recipients_keep_their_error
"""

import base64
import json
from datetime import datetime, timedelta, timezone

import pytest

from mailforge.core.body import Body
from mailforge.core.codec import (
    body_from_dict,
    body_to_dict,
    email_from_dict,
    email_from_json,
    email_to_dict,
    email_to_json,
)
from mailforge.core.email import Email
from mailforge.core.factory import mixed
from mailforge.errors import EmailDecodeError, EmptyRecipientsError
from mailforge.mime import (
    TEXT_PLAIN_UTF8,
    Boundary,
    BodyPart,
    Charset,
    ContentType,
    Multipart,
    TransferEncoding,
)

DATE = datetime(2024, 3, 1, 9, 30, tzinfo=timezone(timedelta(hours=2)))


def _round_trip(email: Email) -> None:
    assert email_from_dict(email_to_dict(email)) == email
    assert email_from_json(email_to_json(email)) == email


def test_text_email_round_trip():
    email = Email.with_text(
        ["r@x.com", "Rita <r2@x.com>"],
        "s@x.com",
        "Grüße",
        "Hallo\nWelt",
        date=DATE,
        additional_headers=[("X-Priority", "1"), ("X-Tag", "a"), ("X-Tag", "b")],
    )
    payload = email_to_dict(email)
    assert payload["body"] == {
        "type": "text",
        "content": base64.b64encode("Hallo\nWelt".encode("utf-8")).decode("ascii"),
        "charset": "utf-8",
    }
    assert payload["date"] == "2024-03-01T09:30:00+02:00"
    _round_trip(email)


def test_html_email_round_trip():
    email = Email.with_html(["r@x.com"], "s@x.com", "S", "<p>Hi</p>")
    assert email_to_dict(email)["body"]["type"] == "html"
    _round_trip(email)


def test_multipart_email_round_trip(random_bytes):
    """
    What:
        A ``multipart/mixed`` body keeps its subtype, boundary, and every part.

    Why:
        Parts hold binary attachments, quoted-printable text, and nested
        multiparts; the decoded body must render byte for byte the same.

    How:
        Mix all three part shapes, round-trip through dict and JSON, and
        compare both the value and the rendered text.
    """

    inner = Multipart.of("alternative", [BodyPart.text("inner")], Boundary("inner-boundary"))
    parts = [
        BodyPart(TEXT_PLAIN_UTF8, "café = x".encode("utf-8"), TransferEncoding.QUOTED_PRINTABLE),
        BodyPart.binary(
            bytes(range(256)),
            ContentType.create("application", "octet-stream"),
            filename="blob.bin",
        ),
        BodyPart.multipart(inner),
    ]
    email = Email(
        to=["r@x.com"],
        from_="s@x.com",
        subject="Files",
        body=Body.multipart(mixed(parts, random_bytes=random_bytes)),
    )
    body = email_to_dict(email)["body"]
    assert body["type"] == "multipart"
    assert body["multipart"]["subtype"] == "mixed"
    assert body["multipart"]["boundary"] == "----=_Part_" + "01" * 16
    assert "transfer_encoding" not in body["multipart"]["parts"][2]
    assert body["multipart"]["parts"][1]["headers"] == [
        {"name": "Content-Disposition", "value": 'attachment; filename="blob.bin"'}
    ]
    decoded = email_from_json(email_to_json(email, indent=2))
    assert decoded == email
    assert decoded.body.render() == email.body.render()
    _round_trip(email)


def test_non_utf8_leaf_round_trip():
    body = Body.text_data(b"caf\xe9", Charset("iso-8859-1"))
    assert body_from_dict(body_to_dict(body)) == body
    assert body_from_dict(body_to_dict(body)).data == b"caf\xe9"


def test_optional_fields_only_when_present():
    payload = email_to_dict(Email.with_text(["r@x.com"], "s@x.com", "S", "Hi"))
    assert set(payload) == {"to", "from", "subject", "body", "additional_headers"}

    full = Email(
        to=["r@x.com"],
        from_="s@x.com",
        subject="S",
        body="Hi",
        reply_to="reply@x.com",
        cc=["c@x.com"],
        bcc=["b@x.com"],
        date=DATE,
    )
    payload = email_to_dict(full)
    assert payload["reply_to"] == "reply@x.com"
    assert payload["cc"] == ["c@x.com"]
    assert payload["bcc"] == ["b@x.com"]
    _round_trip(full)


def test_empty_cc_kept_apart_from_missing():
    email = Email(to=["r@x.com"], from_="s@x.com", subject="S", body="Hi", cc=[])
    payload = email_to_dict(email)
    assert payload["cc"] == []
    assert "bcc" not in payload
    decoded = email_from_dict(payload)
    assert decoded.cc == ()
    assert decoded.bcc is None


def test_display_name_is_stored_unencoded():
    email = Email(to=["Zoë Example <z@x.com>"], from_="s@x.com", subject="S", body="Hi")
    payload = json.loads(email_to_json(email))
    assert payload["to"] == [{"name": "Zoë Example", "address": "z@x.com"}]
    assert email_from_dict(payload).to[0].display_name == "Zoë Example"


def test_bare_string_recipient_is_accepted():
    payload = email_to_dict(Email.with_text(["r@x.com"], "s@x.com", "S", "Hi"))
    payload["to"] = "r@x.com"
    assert email_from_dict(payload).to[0].address == "r@x.com"


def _valid_payload():
    return email_to_dict(Email.with_text(["r@x.com"], "s@x.com", "S", "Hi"))


@pytest.mark.parametrize(
    "mutate",
    [
        lambda p: p.pop("subject"),
        lambda p: p.update(subject=42),
        lambda p: p["body"].update(type="pdf"),
        lambda p: p["body"].update(content="not base64!"),
        lambda p: p["body"].pop("charset"),
        lambda p: p.update(date="yesterday"),
        lambda p: p.update(additional_headers=[{"name": "X-Only-Name"}]),
    ],
)
def test_malformed_payloads(mutate):
    payload = _valid_payload()
    mutate(payload)
    with pytest.raises(EmailDecodeError):
        email_from_dict(payload)


def test_malformed_json():
    with pytest.raises(EmailDecodeError, match="Invalid email payload"):
        email_from_json("{not json")


def test_malformed_multipart_body():
    with pytest.raises(EmailDecodeError):
        body_from_dict({"type": "multipart", "multipart": {"subtype": "mixed", "parts": []}})


def test_empty_recipients_keep_their_error():
    """Domain failures surface with their own type, not as decode errors."""

    payload = _valid_payload()
    payload["to"] = []
    with pytest.raises(EmptyRecipientsError):
        email_from_dict(payload)
