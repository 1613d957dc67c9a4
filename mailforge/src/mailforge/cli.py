"""mailforge command-line interface.

What:
  Provide a Typer entry point that turns YAML message documents into ``.eml``
  files. The ``render``, ``envelope``, and ``inspect`` commands cover writing
  the message, listing transport recipients, and reviewing derived headers
  or the serialised email.

Why:
  Operators and test fixtures need a scriptable way to produce wire-ready
  messages without writing Python. Going through the same composition and
  projection code as library callers keeps the output identical.

How:
  Load the runtime configuration, parse the document with
  :func:`~mailforge.config.load_message_document_file`, build the
  :class:`~mailforge.core.email.Email`, and project it with
  :func:`~mailforge.wire.to_wire_message`. Failures are logged through the
  ``mailforge.cli`` logger and mapped to exit code ``1``.

Interfaces:
  ``app`` (Typer application), ``render``, ``envelope``, ``inspect``.

Invariants & Safety:
  - Exit codes follow shell expectations (``0`` success, ``1`` failure).
  - ``render`` writes nothing but message bytes to stdout; diagnostics go to
    stderr.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import typer

from .config.loader import ConfigLoadError, load_message_document_file, load_runtime_config
from .config.schema import RuntimeConfig
from .core.codec import email_to_json
from .core.email import Email
from .errors import MailForgeError
from .utils.ids import checksum
from .utils.logging import get_logger
from .wire.projection import to_wire_message


app = typer.Typer(help="Compose RFC 5322 messages from YAML message documents")

LOGGER = logging.getLogger("mailforge.cli")

_DOCUMENT_HELP = "Path to a YAML message document"
_CONFIG_HELP = "Path to mailforge.yaml (defaults to $MAILFORGE_CONFIG_PATH or the standard locations)"


def _configure_logging(runtime: RuntimeConfig) -> None:
    level = "WARNING" if runtime.logging.level == "WARN" else runtime.logging.level
    logging.basicConfig(stream=sys.stderr, format="%(levelname)s %(name)s %(message)s")
    LOGGER.setLevel(level)


def _compose(document: Path, config: Optional[Path]) -> Tuple[RuntimeConfig, Email]:
    """Load configuration and build the email described by ``document``.

    Raises:
      typer.Exit: With code ``1`` when configuration, document, or
        composition fails.
    """

    try:
        runtime = load_runtime_config(config)
    except ConfigLoadError as exc:
        LOGGER.error("runtime_load_failed: %s", exc)
        raise typer.Exit(code=1) from exc
    _configure_logging(runtime)
    try:
        parsed = load_message_document_file(document)
        email = parsed.to_email(
            charset=runtime.compose.default_charset,
            mailer=runtime.compose.mailer,
        )
    except MailForgeError as exc:
        LOGGER.error("compose_failed document=%s error=%s", document, exc)
        raise typer.Exit(code=1) from exc
    return runtime, email


@app.command("render")
def render(
    document: Path = typer.Argument(..., help=_DOCUMENT_HELP),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the .eml here instead of stdout"),
    config: Optional[Path] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Render a message document to ``.eml`` bytes.

    Bcc recipients are kept out of the header block; use ``envelope`` to list
    them for the transport.
    """

    runtime, email = _compose(document, config)
    try:
        wire = to_wire_message(email, logger=get_logger("mailforge.wire", runtime.logging.level))
        payload = wire.as_bytes(logger=get_logger("mailforge.wire", runtime.logging.level))
    except MailForgeError as exc:
        LOGGER.error("render_failed document=%s error=%s", document, exc)
        raise typer.Exit(code=1) from exc
    if output is None:
        typer.echo(payload, nl=False)
    else:
        output.write_bytes(payload)
    LOGGER.info("rendered message_id=%s checksum=%s", wire.message_id, checksum(payload))


@app.command("envelope")
def envelope(
    document: Path = typer.Argument(..., help=_DOCUMENT_HELP),
    config: Optional[Path] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Print every transport recipient (to, cc, bcc), one per line."""

    _, email = _compose(document, config)
    try:
        wire = to_wire_message(email)
    except MailForgeError as exc:
        LOGGER.error("envelope_failed document=%s error=%s", document, exc)
        raise typer.Exit(code=1) from exc
    for recipient in wire.envelope_recipients():
        typer.echo(recipient)


@app.command("inspect")
def inspect(
    document: Path = typer.Argument(..., help=_DOCUMENT_HELP),
    config: Optional[Path] = typer.Option(None, "--config", help=_CONFIG_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print the serialised email instead"),
) -> None:
    """Print the message summary followed by its derived headers.

    With ``--json`` the email is printed in the
    :func:`~mailforge.core.codec.email_to_json` encoding.
    """

    _, email = _compose(document, config)
    if as_json:
        typer.echo(email_to_json(email, indent=2))
        return
    typer.echo(email.summary())
    for header in email.all_headers:
        typer.echo(f"{header.name}: {header.value}")


def main() -> None:
    """Execute the Typer application entry point."""

    app()


if __name__ == "__main__":  # pragma: no cover
    main()
