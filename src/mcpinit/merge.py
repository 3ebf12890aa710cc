# Merge orchestration: write servers into one client's config
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from mcpinit.clients import ClientEntry, resolve_config_path
from mcpinit.models import ServerEntry
from mcpinit.storage import Storage
from mcpinit.writers import get_writer

logger = logging.getLogger(__name__)


@dataclass
class MergeResult:
    """Report from merging servers into a client config.

    ABOUTME: backup_path is None when there was no existing file
    ABOUTME: warnings carries recovered parse problems for display
    """
    config_path: str
    output: str
    server_count: int
    backup_path: str | None = None
    warnings: list[str] = field(default_factory=list)


def merge_config(
    client: ClientEntry,
    servers: Sequence[ServerEntry],
    project_dir: str,
    storage: Storage,
    platform: str | None = None,
) -> MergeResult:
    """Merge server entries into a client's config file.

    ABOUTME: Backs up an existing file to <path>.bak before modifying it
    ABOUTME: Same-path calls must be serialized by the caller

    Args:
        client: Target client from the catalog
        servers: Servers to upsert
        project_dir: Directory substituted for {project}
        storage: Storage backend
        platform: sys.platform style name, defaults to the host

    Returns:
        MergeResult with the resolved path and written text

    Examples:
        >>> from mcpinit.clients import get_client
        >>> from mcpinit.registry import select_servers
        >>> from mcpinit.storage import MemoryStorage
        >>> result = merge_config(
        ...     get_client("vscode"), select_servers(["pare-git"]), "/project", MemoryStorage()
        ... )
        >>> result.config_path
        '/project/.vscode/mcp.json'
    """
    config_path = resolve_config_path(client.config_path, project_dir)

    backup_path = storage.backup(config_path)
    if backup_path:
        logger.debug(f"Backed up {client.name} config to {backup_path}")

    result = get_writer(client.format).update(config_path, servers, storage, platform)

    return MergeResult(
        config_path=config_path,
        output=result.output,
        server_count=len(servers),
        backup_path=backup_path,
        warnings=result.warnings,
    )
