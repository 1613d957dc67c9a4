"""mailforge configuration package.

What:
  Provide a single import surface for runtime configuration and message
  document loading.

Interfaces:
  - load_runtime_config / get_runtime_config / reset_runtime_config: Resolve
    ``mailforge.yaml`` and expose a cached :class:`RuntimeConfig`.
  - load_message_document / load_message_document_file /
    dump_message_document: YAML message document IO.
  - RuntimeConfig / MessageDocument: Pydantic schemas.
  - ConfigLoadError / RuntimeConfigError / MessageDocumentError: Error types.

Invariants:
  - Callers go through the schema types so user-provided YAML is strictly
    validated before use.
"""

from .loader import (
    ConfigLoadError,
    MessageDocumentError,
    RuntimeConfigError,
    dump_message_document,
    get_runtime_config,
    load_message_document,
    load_message_document_file,
    load_runtime_config,
    reset_runtime_config,
)
from .schema import MessageDocument, RuntimeConfig

__all__ = [
    "load_runtime_config",
    "get_runtime_config",
    "reset_runtime_config",
    "load_message_document",
    "load_message_document_file",
    "dump_message_document",
    "RuntimeConfig",
    "MessageDocument",
    "ConfigLoadError",
    "RuntimeConfigError",
    "MessageDocumentError",
]
