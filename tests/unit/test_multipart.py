"""
Module: tests/unit/test_multipart.py

What:
    Exercise multipart construction, validation, and the framed text produced
    by :meth:`mailforge.mime.Multipart.render`, plus the multipart factories.

Why:
    Mail readers split multipart bodies purely on the delimiter lines. A
    missing CRLF, a wrong part order, or a boundary that also occurs in part
    content breaks every downstream reader.

How:
    Build small multiparts with fixed boundaries and compare the rendered
    text exactly; use the factories with an injected random source where
    output is asserted.

Interfaces:
    test_render_frames_each_part, test_alternative_orders_text_before_html,
    test_mixed_preserves_order, test_empty_multipart_rejected,
    test_boundary_collision_rejected, test_binary_attachment_part,
    test_nested_multipart_part, test_quoted_printable_encoding,
    test_related_multipart_with_quoted_printable_part
"""

import pytest

from mailforge.core.factory import alternative, mixed
from mailforge.errors import MultipartError
from mailforge.mime import (
    TEXT_HTML_UTF8,
    TEXT_PLAIN_UTF8,
    Boundary,
    BodyPart,
    ContentType,
    Multipart,
    MultipartSubtype,
    TransferEncoding,
)


def test_render_frames_each_part():
    """Parts are delimited, headed, separated by a blank line, and terminated."""

    multipart = Multipart.of("mixed", [BodyPart.text("a\nb")], Boundary("xyz"))
    assert multipart.render() == (
        "--xyz\r\n"
        "Content-Type: text/plain; charset=utf-8\r\n"
        "Content-Transfer-Encoding: 7bit\r\n"
        "\r\n"
        "a\r\nb\r\n"
        "--xyz--\r\n"
    )


def test_alternative_orders_text_before_html(random_bytes):
    """
    What:
        ``alternative`` yields text/plain first and text/html second.

    Why:
        Readers prefer the last alternative they understand; swapping the
        order would hide the HTML version.
    """

    multipart = alternative("Hello", "<p>Hello</p>", random_bytes=random_bytes)
    assert multipart.subtype is MultipartSubtype.ALTERNATIVE
    assert [part.content_type for part in multipart.parts] == [TEXT_PLAIN_UTF8, TEXT_HTML_UTF8]
    assert all(part.transfer_encoding is TransferEncoding.SEVEN_BIT for part in multipart.parts)
    rendered = multipart.render()
    assert rendered.index("Hello") < rendered.index("<p>Hello</p>")
    assert multipart.boundary.value == "----=_Part_" + "01" * 16
    assert rendered.endswith(f"--{multipart.boundary.value}--\r\n")


def test_alternative_content_type_quotes_boundary(random_bytes):
    multipart = alternative("a", "<b>a</b>", random_bytes=random_bytes)
    assert multipart.content_type.header_value == (
        'multipart/alternative; boundary="----=_Part_' + "01" * 16 + '"'
    )


def test_mixed_preserves_order():
    parts = [BodyPart.html("<i>one</i>"), BodyPart.text("two"), BodyPart.text("three")]
    multipart = mixed(parts)
    assert multipart.subtype is MultipartSubtype.MIXED
    assert list(multipart.parts) == parts


def test_empty_multipart_rejected():
    with pytest.raises(MultipartError):
        mixed([])


def test_boundary_collision_rejected():
    """Construction fails when part content contains ``--<boundary>``."""

    with pytest.raises(MultipartError, match="occurs inside part 1"):
        Multipart(
            MultipartSubtype.MIXED,
            (BodyPart.text("fine"), BodyPart.text("quoted --abc line")),
            Boundary("abc"),
        )


def test_binary_attachment_part():
    part = BodyPart.binary(
        b"\x00\x01",
        ContentType.create("application", "octet-stream"),
        filename="a.bin",
    )
    assert part.transfer_encoding is TransferEncoding.BASE64
    assert part.encoded_content == b"AAE=\n"
    assert part.header_list().names() == [
        "Content-Type",
        "Content-Transfer-Encoding",
        "Content-Disposition",
    ]
    assert part.header_list().get("content-disposition") == 'attachment; filename="a.bin"'


def test_part_headers_cannot_override_mime_headers():
    part = BodyPart(
        TEXT_PLAIN_UTF8,
        b"x",
        TransferEncoding.SEVEN_BIT,
        [("content-type", "text/evil"), ("X-Tag", "kept")],
    )
    headers = part.header_list()
    assert headers.get_all("Content-Type") == ["text/plain; charset=utf-8"]
    assert headers.get("X-Tag") == "kept"


def test_nested_multipart_part(random_bytes):
    inner = alternative("t", "<b>t</b>", random_bytes=random_bytes)
    part = BodyPart.multipart(inner)
    assert part.transfer_encoding is None
    assert "Content-Transfer-Encoding" not in part.header_list()
    outer = mixed([part, BodyPart.text("footer")], random_bytes=random_bytes)
    rendered = outer.render()
    assert inner.boundary.delimiter + "--" in rendered
    assert rendered.endswith(f"--{outer.boundary.value}--\r\n")
    assert outer.boundary != inner.boundary


def test_quoted_printable_encoding():
    encoded = TransferEncoding.QUOTED_PRINTABLE.encode("café = x".encode("utf-8"))
    assert encoded == b"caf=C3=A9 =3D x"
    assert TransferEncoding.EIGHT_BIT.encode(b"caf\xc3\xa9") == b"caf\xc3\xa9"


def test_related_multipart_with_quoted_printable_part():
    """
    What:
        A ``multipart/related`` body renders its subtype and a QP-encoded part.

    Why:
        Non-ASCII text parts marked ``quoted-printable`` must carry encoded
        content under the matching header, not the raw UTF-8 bytes.
    """

    part = BodyPart(TEXT_PLAIN_UTF8, "café = x".encode("utf-8"), TransferEncoding.QUOTED_PRINTABLE)
    multipart = Multipart.of("related", [part], Boundary("rel"))
    assert multipart.subtype is MultipartSubtype.RELATED
    assert multipart.content_type.header_value == "multipart/related; boundary=rel"
    assert multipart.render() == (
        "--rel\r\n"
        "Content-Type: text/plain; charset=utf-8\r\n"
        "Content-Transfer-Encoding: quoted-printable\r\n"
        "\r\n"
        "caf=C3=A9 =3D x\r\n"
        "--rel--\r\n"
    )
