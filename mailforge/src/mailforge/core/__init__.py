"""Message composition core.

What:
  Expose the email aggregate, its body variant, the multipart factories, and
  their dict and JSON encoding.

Interfaces:
  - Email: validated aggregate with derived ``all_headers``.
  - Body / BodyKind: closed text / HTML / multipart body variant.
  - alternative / mixed: multipart factories with random boundaries.
  - random_boundary: boundary generator.
  - email_to_dict / email_from_dict (and JSON variants), body_to_dict /
    body_from_dict: lossless serialisation.

Invariants:
  - Data flows one way: boundary -> factory -> body -> email. Nothing here
    imports the wire layer.
"""

from .body import Body, BodyKind
from .boundary import random_boundary
from .codec import (
    body_from_dict,
    body_to_dict,
    email_from_dict,
    email_from_json,
    email_to_dict,
    email_to_json,
)
from .email import Email
from .factory import alternative, mixed

__all__ = [
    "Body",
    "BodyKind",
    "Email",
    "alternative",
    "mixed",
    "random_boundary",
    "email_to_dict",
    "email_from_dict",
    "email_to_json",
    "email_from_json",
    "body_to_dict",
    "body_from_dict",
]
