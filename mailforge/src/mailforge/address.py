"""Syntax-validated email addresses.

What:
  Provide :class:`EmailAddress`, the immutable address value used throughout
  message composition, with a raw-string projection and domain accessor.

Why:
  Composition code assumes every address it holds is already syntactically
  valid. Validating once, at construction, keeps :class:`~mailforge.core.email.Email`
  free of address checks and gives the wire projection a predictable input.

How:
  Delegate syntax validation and canonicalisation to ``email-validator`` with
  deliverability checks disabled (no DNS lookups), and use :mod:`email.utils`
  to split and format the optional display name.

Interfaces:
  :class:`EmailAddress`.

Invariants & Safety:
  - ``address`` always holds the normalised addr-spec returned by
    ``email-validator``.
  - Construction never touches the network.
"""
from __future__ import annotations

from dataclasses import dataclass
from email.utils import formataddr, parseaddr
from typing import Optional

from email_validator import EmailNotValidError, validate_email

from .errors import AddressError


@dataclass(frozen=True)
class EmailAddress:
    """An addr-spec with an optional display name.

    Attributes:
      address: Normalised ``local@domain`` string.
      display_name: Human readable name rendered as ``Name <local@domain>``.
    """

    address: str
    display_name: Optional[str] = None

    def __post_init__(self) -> None:
        try:
            validated = validate_email(self.address, check_deliverability=False)
        except EmailNotValidError as exc:
            raise AddressError(f"Invalid email address {self.address!r}: {exc}") from exc
        object.__setattr__(self, "address", validated.normalized)
        if not self.display_name:
            object.__setattr__(self, "display_name", None)

    @classmethod
    def parse(cls, value: str) -> "EmailAddress":
        """Build an address from ``local@domain`` or ``Name <local@domain>`` text.

        Raises:
          AddressError: If no addr-spec can be extracted or it is invalid.
        """

        display_name, addr_spec = parseaddr(value)
        if not addr_spec:
            raise AddressError(f"Invalid email address {value!r}: no addr-spec found")
        return cls(addr_spec, display_name or None)

    @classmethod
    def coerce(cls, value: "EmailAddress | str") -> "EmailAddress":
        """Return ``value`` unchanged or parse it when given as text."""

        if isinstance(value, EmailAddress):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        raise TypeError(f"Expected EmailAddress or str, got {type(value).__name__}")

    @property
    def local_part(self) -> str:
        return self.address.rsplit("@", 1)[0]

    @property
    def domain(self) -> str:
        return self.address.rsplit("@", 1)[1]

    @property
    def raw_value(self) -> str:
        """Address as it appears in a header, display name included."""

        if self.display_name:
            return formataddr((self.display_name, self.address))
        return self.address

    def __str__(self) -> str:
        return self.raw_value
