"""Wire projection of composed emails.

Interfaces:
  - to_wire_message: Email -> WireMessage projection.
  - WireMessage: RFC 5322 message with envelope recipients and ``.eml`` rendering.
"""

from .message import WireMessage
from .projection import to_wire_message

__all__ = ["WireMessage", "to_wire_message"]
