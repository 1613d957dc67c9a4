"""Strict loaders and serializers for mailforge configuration documents.

What:
  Locate, parse, validate, and cache the runtime configuration
  (``mailforge.yaml``), and load or dump YAML message documents consumed by
  the CLI.

Why:
  Both documents come from outside the program and may be malformed.
  Centralising parsing gives every caller the same validation and the same
  error types, so the CLI can report user mistakes without tracebacks.

How:
  Resolve candidate paths from an explicit argument, the
  ``MAILFORGE_CONFIG_PATH`` environment variable, and well-known defaults.
  Parse YAML with ``yaml.safe_load``, validate with the Pydantic models from
  :mod:`mailforge.config.schema`, and wrap parser, IO, and validation failures
  in typed exceptions carrying path context.

Interfaces:
  - :func:`load_runtime_config` / :func:`get_runtime_config` /
    :func:`reset_runtime_config`: Manage runtime configuration and its cache.
  - :func:`load_message_document` / :func:`load_message_document_file` /
    :func:`dump_message_document`: Message document IO.
  - :class:`ConfigLoadError`, :class:`RuntimeConfigError`,
    :class:`MessageDocumentError`.

Invariants:
  - External payloads pass strict Pydantic validation before being returned.
  - An explicitly requested configuration path must exist; only the default
    search may fall back to built-in defaults.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Iterable, Optional, Tuple

import yaml
from pydantic import ValidationError

from ..errors import MailForgeError
from .schema import MessageDocument, RuntimeConfig


class ConfigLoadError(MailForgeError):
    """Base error for configuration or document parsing and validation failures."""


class RuntimeConfigError(ConfigLoadError):
    """Error raised when ``mailforge.yaml`` cannot be loaded or validated."""


class MessageDocumentError(ConfigLoadError):
    """Error raised when a message document is not valid YAML or fails the schema."""


_CONFIG_ENV = "MAILFORGE_CONFIG_PATH"
_DEFAULT_LOCATIONS: Tuple[Path, ...] = (
    Path("mailforge.yaml"),
    Path("~/.config/mailforge/config.yaml"),
    Path("/etc/mailforge/config.yaml"),
)
_RUNTIME_CACHE: Optional[Tuple[Optional[Path], RuntimeConfig]] = None


def _explicit_paths(path: Optional[Path]) -> Iterable[Path]:
    """Yield caller- and environment-supplied paths; these must exist."""

    if path is not None:
        yield path.expanduser()
    env_path = os.environ.get(_CONFIG_ENV)
    if env_path:
        yield Path(env_path).expanduser()


def _parse_yaml_mapping(text: str, source: str, error: type[ConfigLoadError]) -> dict[str, Any]:
    """Parse ``text`` and require a top-level mapping.

    Raises:
      ConfigLoadError: ``error`` subclass describing the failure and ``source``.
    """

    try:
        payload = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise error(f"Invalid YAML in {source}: {exc}") from exc
    if not isinstance(payload, dict):
        raise error(f"{source} must contain a mapping at the top-level")
    return payload


def _load_runtime_from_path(path: Path) -> RuntimeConfig:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise RuntimeConfigError(f"Configuration file missing: {path}") from exc
    except OSError as exc:  # pragma: no cover - filesystem surface
        raise RuntimeConfigError(f"Unable to read configuration file {path}: {exc}") from exc
    payload = _parse_yaml_mapping(text, str(path), RuntimeConfigError)
    try:
        return RuntimeConfig.model_validate(payload)
    except ValidationError as exc:
        raise RuntimeConfigError(f"Invalid configuration in {path}: {exc}") from exc


def load_runtime_config(
    path: Optional[Path | str] = None,
    *,
    reload: bool = False,
) -> RuntimeConfig:
    """Resolve, parse, and cache the runtime configuration.

    What:
      Locate ``mailforge.yaml`` using the precedence chain and return a
      validated :class:`RuntimeConfig`.

    How:
      Consult the cache unless ``reload`` is requested or a different explicit
      path is asked for. Try the explicit path and ``$MAILFORGE_CONFIG_PATH``
      first (either must exist), then the default locations; fall back to
      :class:`RuntimeConfig` defaults when none of them exists.

    Args:
      path: Optional explicit location of the configuration file.
      reload: When ``True`` forces a fresh load bypassing the cache.

    Raises:
      RuntimeConfigError: If a requested file is missing or invalid.
    """

    global _RUNTIME_CACHE

    requested_path = Path(path).expanduser() if isinstance(path, (str, Path)) else None
    if not reload and _RUNTIME_CACHE is not None:
        cached_path, cached_config = _RUNTIME_CACHE
        if requested_path is None or cached_path == requested_path:
            return cached_config

    for candidate in _explicit_paths(requested_path):
        config = _load_runtime_from_path(candidate)
        _RUNTIME_CACHE = (candidate, config)
        return config

    for default in _DEFAULT_LOCATIONS:
        candidate = default.expanduser()
        if candidate.exists():
            config = _load_runtime_from_path(candidate)
            _RUNTIME_CACHE = (candidate, config)
            return config

    config = RuntimeConfig()
    _RUNTIME_CACHE = (None, config)
    return config


def get_runtime_config() -> RuntimeConfig:
    """Return the cached runtime configuration, loading it on demand."""

    return load_runtime_config()


def reset_runtime_config() -> None:
    """Clear the runtime configuration cache."""

    global _RUNTIME_CACHE
    _RUNTIME_CACHE = None


def load_message_document(source: bytes) -> MessageDocument:
    """Parse and validate a YAML message document.

    Args:
      source: Raw UTF-8 YAML bytes.

    Raises:
      MessageDocumentError: If decoding, parsing, or validation fails.
    """

    try:
        text = source.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MessageDocumentError(f"Message document is not UTF-8: {exc}") from exc
    payload = _parse_yaml_mapping(text, "message document", MessageDocumentError)
    try:
        return MessageDocument.model_validate(payload)
    except ValidationError as exc:
        raise MessageDocumentError(f"Invalid message document: {exc}") from exc


def load_message_document_file(path: Path | str) -> MessageDocument:
    """Read ``path`` and delegate to :func:`load_message_document`."""

    target = Path(path).expanduser()
    try:
        source = target.read_bytes()
    except OSError as exc:
        raise MessageDocumentError(f"Unable to read message document {target}: {exc}") from exc
    return load_message_document(source)


def dump_message_document(document: MessageDocument) -> bytes:
    """Serialise ``document`` to canonical YAML bytes (``from`` key aliased)."""

    payload = document.model_dump(mode="json", by_alias=True, exclude_none=True)
    if not payload.get("headers"):
        payload.pop("headers", None)
    return yaml.safe_dump(payload, sort_keys=False, allow_unicode=True).encode("utf-8")
