"""MIME building blocks used by message composition.

What:
  Re-export the charset, content-type, transfer-encoding, header-list, and
  multipart types.

Interfaces:
  ``Charset``, ``UTF8``, ``ContentType``, ``TEXT_PLAIN_UTF8``,
  ``TEXT_HTML_UTF8``, ``TransferEncoding``, ``Header``, ``HeaderList``,
  ``Boundary``, ``BodyPart``, ``Multipart``, ``MultipartSubtype``.
"""

from .headers import Header, HeaderList
from .multipart import BodyPart, Boundary, Multipart, MultipartSubtype
from .types import TEXT_HTML_UTF8, TEXT_PLAIN_UTF8, UTF8, Charset, ContentType, TransferEncoding

__all__ = [
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
]
