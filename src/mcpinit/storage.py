# Storage abstraction for client config files
import logging
import shutil
from pathlib import Path
from typing import Protocol, runtime_checkable

from mcpinit.errors import StorageFailure

logger = logging.getLogger(__name__)

# ABOUTME: Suffix appended to a config path to build its backup path
BACKUP_SUFFIX = ".bak"


@runtime_checkable
class Storage(Protocol):
    """Protocol for named text streams.

    ABOUTME: Writers and the merge layer only touch files through this interface
    ABOUTME: read_text() returns None when the file is absent
    """

    def read_text(self, path: str) -> str | None:
        """Return file contents, or None if the file doesn't exist."""
        ...

    def write_text(self, path: str, text: str) -> None:
        """Replace file contents with text."""
        ...

    def exists(self, path: str) -> bool:
        """Return True if path names a file or directory."""
        ...

    def backup(self, path: str) -> str | None:
        """Copy path to path + '.bak' and return the backup path."""
        ...


class LocalStorage:
    """Storage backed by the real filesystem.

    ABOUTME: Creates parent directories on write
    ABOUTME: Re-raises OSError and text codec errors as StorageFailure
    """

    def read_text(self, path: str) -> str | None:
        file_path = Path(path)
        if not file_path.is_file():
            return None

        try:
            with open(file_path, encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageFailure(f"Could not read {path}: {e}") from e

    def write_text(self, path: str, text: str) -> None:
        file_path = Path(path)
        try:
            # Fail before open() truncates the existing file
            text.encode("utf-8")
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, "w", encoding="utf-8") as f:
                f.write(text)
        except (OSError, UnicodeEncodeError) as e:
            raise StorageFailure(f"Could not write {path}: {e}") from e

        logger.debug(f"Wrote {len(text)} characters to {path}")

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def backup(self, path: str) -> str | None:
        """Copy an existing file to path + '.bak'.

        ABOUTME: Uses shutil.copy2() to preserve file metadata
        ABOUTME: Overwrites a previous backup of the same file

        Returns:
            Path to the backup file, or None if there was nothing to back up
        """
        source = Path(path)
        if not source.is_file():
            return None

        backup_path = path + BACKUP_SUFFIX
        try:
            shutil.copy2(source, backup_path)
        except OSError as e:
            raise StorageFailure(f"Could not back up {path}: {e}") from e

        logger.debug(f"Backed up {path} to {backup_path}")
        return backup_path


class MemoryStorage:
    """In-memory storage for tests and dry runs.

    ABOUTME: files is an insertion-ordered dict of path -> text
    ABOUTME: reads and writes record every access for contract checks

    Examples:
        >>> storage = MemoryStorage({"/c.json": "{}"})
        >>> storage.read_text("/c.json")
        '{}'
        >>> storage.read_text("/missing.json") is None
        True
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.files: dict[str, str] = dict(initial) if initial else {}
        self.reads: list[str] = []
        self.writes: list[str] = []

    def read_text(self, path: str) -> str | None:
        self.reads.append(path)
        return self.files.get(path)

    def write_text(self, path: str, text: str) -> None:
        self.writes.append(path)
        self.files[path] = text

    def exists(self, path: str) -> bool:
        # A directory exists when some stored file lives beneath it
        if path in self.files:
            return True
        prefix = path.rstrip("/") + "/"
        return any(name.startswith(prefix) for name in self.files)

    def backup(self, path: str) -> str | None:
        content = self.files.get(path)
        if content is None:
            return None

        backup_path = path + BACKUP_SUFFIX
        self.files[backup_path] = content
        return backup_path
