# Core data models for mcpinit
from dataclasses import dataclass, field
from typing import Any, Literal

# ABOUTME: Supported client config formats, one writer per format
ConfigFormat = Literal[
    "json-mcpservers",
    "json-vscode",
    "json-zed",
    "toml-codex",
    "yaml-continue",
]

ConfigScope = Literal["project", "user"]

# ABOUTME: Decoded config tree; writers only accept a top-level dict
Document = dict[str, Any]


@dataclass(frozen=True)
class ServerEntry:
    """Immutable descriptor of one tool server to register.

    ABOUTME: id is the stable kebab-case key used for deduplication
    ABOUTME: pkg is the npm package reference launched through npx
    """
    id: str
    pkg: str
    description: str = ""


@dataclass(frozen=True)
class ResolvedCommand:
    """Executable command line for a server on a given platform."""
    command: str
    args: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of decoding an existing config file.

    ABOUTME: warning is None when the text decoded cleanly or was empty
    ABOUTME: On a recovered failure, document is a fresh skeleton
    """
    document: Document
    warning: str | None = None


@dataclass
class WriteResult:
    """Outcome of a single writer invocation.

    ABOUTME: output is the exact text written back to storage
    """
    path: str
    output: str
    warnings: list[str] = field(default_factory=list)
