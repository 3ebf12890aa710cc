# Config writers: one declarative strategy per client format
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Literal

from mcpinit.commands import resolve_command
from mcpinit.errors import InvalidArgument
from mcpinit.formats import JSONC, TOML, YAML, Codec, decode_document
from mcpinit.models import ConfigFormat, Document, ResolvedCommand, ServerEntry, WriteResult
from mcpinit.storage import Storage

logger = logging.getLogger(__name__)

Shape = Literal["keyed", "list"]

# ABOUTME: Banner required by Continue's block config files
CONTINUE_BANNER: dict[str, str] = {
    "name": "Pare Tools",
    "version": "0.0.1",
    "schema": "v1",
}


def _empty() -> Document:
    return {}


def _continue_skeleton() -> Document:
    return {**CONTINUE_BANNER, "mcpServers": []}


def _command_record(entry: ServerEntry, resolved: ResolvedCommand) -> dict[str, Any]:
    return {"command": resolved.command, "args": list(resolved.args)}


def _stdio_record(entry: ServerEntry, resolved: ResolvedCommand) -> dict[str, Any]:
    return {"type": "stdio", "command": resolved.command, "args": list(resolved.args)}


def _zed_record(entry: ServerEntry, resolved: ResolvedCommand) -> dict[str, Any]:
    return {"command": resolved.command, "args": list(resolved.args), "env": {}}


def _continue_record(entry: ServerEntry, resolved: ResolvedCommand) -> dict[str, Any]:
    return {
        "name": entry.id,
        "type": "stdio",
        "command": resolved.command,
        "args": list(resolved.args),
    }


@dataclass(frozen=True)
class ConfigWriter:
    """Merge strategy for one client config format.

    ABOUTME: Format differences are data, the merge algorithm is shared
    ABOUTME: keyed shape upserts container[id], list shape matches identify_field
    ABOUTME: preserve_fields are only set when an existing record lacks them

    Attributes:
        format: Format identifier used by the client catalog
        codec: Decode/encode pair for the file
        container_key: Top-level key holding the server records
        shape: "keyed" for a map of id -> record, "list" for a list of records
        build_record: Builds the owned fields for one entry
        identify_field: Record field holding the id (list shape only)
        skeleton: Factory for a fresh document
        preserve_fields: Owned fields whose existing values belong to the user
    """
    format: ConfigFormat
    codec: Codec
    container_key: str
    shape: Shape
    build_record: Callable[[ServerEntry, ResolvedCommand], dict[str, Any]]
    identify_field: str = "name"
    skeleton: Callable[[], Document] = _empty
    preserve_fields: tuple[str, ...] = ()

    def write(
        self,
        path: str,
        entries: Sequence[ServerEntry],
        storage: Storage,
        platform: str | None = None,
    ) -> str:
        """Merge entries into the file at path and return the written text.

        ABOUTME: Logs recovery warnings at WARNING
        """
        result = self.update(path, entries, storage, platform)
        for message in result.warnings:
            logger.warning(message)
        return result.output

    def update(
        self,
        path: str,
        entries: Sequence[ServerEntry],
        storage: Storage,
        platform: str | None = None,
    ) -> WriteResult:
        """Read, decode, merge, encode and write back one config file.

        ABOUTME: Exactly one read and one write of path, no other path touched
        ABOUTME: Unparseable content is replaced by a fresh document with a warning
        ABOUTME: Warnings are returned to the caller and logged only at DEBUG
        ABOUTME: StorageFailure and InvalidArgument propagate to the caller

        Args:
            path: Config file path
            entries: Servers to upsert, applied in order (last duplicate wins)
            storage: Storage backend
            platform: sys.platform style name, defaults to the host

        Returns:
            WriteResult with the written text and any recovery warnings
        """
        result = decode_document(storage.read_text(path), self.codec, self.skeleton)
        warnings: list[str] = []
        if result.warning:
            warnings.append(f"{path}: {result.warning}")

        document = result.document
        container_warning = self._prepare(document)
        if container_warning:
            warnings.append(f"{path}: {container_warning}")

        for entry in entries:
            record = self.build_record(entry, resolve_command(entry.pkg, platform))
            if self.shape == "keyed":
                self._upsert_keyed(document[self.container_key], entry.id, record)
            else:
                self._upsert_list(document[self.container_key], entry.id, record)

        output = self.codec.encode(document)
        storage.write_text(path, output)

        for message in warnings:
            logger.debug(message)
        logger.debug(f"Merged {len(entries)} server(s) into {path}")

        return WriteResult(path=path, output=output, warnings=warnings)

    def _prepare(self, document: Document) -> str | None:
        """Ensure banner fields and the server container exist.

        Returns:
            Warning message if an existing container had to be replaced
        """
        if self.shape == "list":
            for key, value in self.skeleton().items():
                if key != self.container_key:
                    document.setdefault(key, value)

        expected = dict if self.shape == "keyed" else list
        container = document.get(self.container_key)
        if container is None:
            document[self.container_key] = expected()
            return None
        if not isinstance(container, expected):
            document[self.container_key] = expected()
            return (
                f"'{self.container_key}' is a {type(container).__name__}, "
                f"expected a {expected.__name__}; replacing it"
            )
        return None

    def _upsert_keyed(self, container: dict[str, Any], server_id: str, record: dict[str, Any]) -> None:
        existing = container.get(server_id)
        if isinstance(existing, dict):
            self._overwrite(existing, record)
        else:
            container[server_id] = record

    def _upsert_list(self, container: list[Any], server_id: str, record: dict[str, Any]) -> None:
        matches = [
            index
            for index, item in enumerate(container)
            if isinstance(item, dict) and item.get(self.identify_field) == server_id
        ]
        if not matches:
            container.append(record)
            return

        self._overwrite(container[matches[0]], record)
        # Collapse duplicates left behind by other tools
        for index in reversed(matches[1:]):
            del container[index]

    def _overwrite(self, existing: dict[str, Any], record: dict[str, Any]) -> None:
        for key, value in record.items():
            if key in self.preserve_fields and key in existing:
                continue
            existing[key] = value


WRITERS: dict[ConfigFormat, ConfigWriter] = {
    "json-mcpservers": ConfigWriter(
        format="json-mcpservers",
        codec=JSONC,
        container_key="mcpServers",
        shape="keyed",
        build_record=_command_record,
    ),
    "json-vscode": ConfigWriter(
        format="json-vscode",
        codec=JSONC,
        container_key="servers",
        shape="keyed",
        build_record=_stdio_record,
    ),
    "json-zed": ConfigWriter(
        format="json-zed",
        codec=JSONC,
        container_key="context_servers",
        shape="keyed",
        build_record=_zed_record,
        preserve_fields=("env",),
    ),
    "toml-codex": ConfigWriter(
        format="toml-codex",
        codec=TOML,
        container_key="mcp_servers",
        shape="keyed",
        build_record=_command_record,
    ),
    "yaml-continue": ConfigWriter(
        format="yaml-continue",
        codec=YAML,
        container_key="mcpServers",
        shape="list",
        build_record=_continue_record,
        identify_field="name",
        skeleton=_continue_skeleton,
    ),
}


def get_writer(config_format: str) -> ConfigWriter:
    """Return the writer for a format, raising InvalidArgument if unknown."""
    try:
        return WRITERS[config_format]  # type: ignore[index]
    except KeyError:
        raise InvalidArgument(f"Unsupported config format '{config_format}'") from None


def write_config(
    config_format: str,
    path: str,
    entries: Sequence[ServerEntry],
    storage: Storage,
    platform: str | None = None,
) -> str:
    """Merge entries into path using the writer for config_format.

    Examples:
        >>> from mcpinit.storage import MemoryStorage
        >>> storage = MemoryStorage()
        >>> text = write_config(
        ...     "json-vscode", "/p/.vscode/mcp.json",
        ...     [ServerEntry("pare-git", "@paretools/git")], storage, "linux",
        ... )
        >>> '"pare-git"' in text
        True
    """
    return get_writer(config_format).write(path, entries, storage, platform)
