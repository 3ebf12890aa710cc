# Catalog of supported MCP clients and their config locations
import os
from dataclasses import dataclass, field
from pathlib import Path

from mcpinit.commands import is_windows
from mcpinit.errors import InvalidArgument
from mcpinit.models import ConfigFormat, ConfigScope
from mcpinit.storage import Storage

# ABOUTME: Placeholder replaced by the project directory in project-scoped paths
PROJECT_PLACEHOLDER = "{project}"


@dataclass(frozen=True)
class ClientEntry:
    """A client application whose config file we can update.

    ABOUTME: config_path is absolute or starts with {project}
    ABOUTME: detect_paths are checked to decide whether the client is installed
    """
    id: str
    name: str
    config_path: str
    format: ConfigFormat
    scope: ConfigScope
    detect_paths: tuple[str, ...] = field(default_factory=tuple)


def _app_data() -> Path:
    return Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))


def _xdg_config() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def _project(*parts: str) -> str:
    return "/".join((PROJECT_PLACEHOLDER, *parts))


def get_clients(platform: str | None = None) -> list[ClientEntry]:
    """Build the client catalog for a platform.

    ABOUTME: Reads APPDATA and XDG_CONFIG_HOME at call time
    ABOUTME: Order is the order clients are presented to the user

    Args:
        platform: sys.platform style name, defaults to the host

    Returns:
        List of ClientEntry
    """
    home = Path.home()
    settings_root = _app_data() if is_windows(platform) else _xdg_config()
    vscode_extensions = home / ".vscode" / "extensions"

    return [
        ClientEntry(
            id="claude-code",
            name="Claude Code",
            config_path=_project(".claude", "settings.local.json"),
            format="json-mcpservers",
            scope="project",
            detect_paths=(str(home / ".claude"),),
        ),
        ClientEntry(
            id="claude-desktop",
            name="Claude Desktop",
            config_path=str(settings_root / "Claude" / "claude_desktop_config.json"),
            format="json-mcpservers",
            scope="user",
            detect_paths=(str(settings_root / "Claude"),),
        ),
        ClientEntry(
            id="cursor",
            name="Cursor",
            config_path=str(home / ".cursor" / "mcp.json"),
            format="json-mcpservers",
            scope="user",
            detect_paths=(str(home / ".cursor"),),
        ),
        ClientEntry(
            id="vscode",
            name="VS Code / GitHub Copilot",
            config_path=_project(".vscode", "mcp.json"),
            format="json-vscode",
            scope="project",
            detect_paths=(str(vscode_extensions),),
        ),
        ClientEntry(
            id="windsurf",
            name="Windsurf",
            config_path=str(home / ".codeium" / "windsurf" / "mcp_config.json"),
            format="json-mcpservers",
            scope="user",
            detect_paths=(str(home / ".codeium" / "windsurf"),),
        ),
        ClientEntry(
            id="zed",
            name="Zed",
            config_path=str(_xdg_config() / "zed" / "settings.json"),
            format="json-zed",
            scope="user",
            detect_paths=(str(_xdg_config() / "zed"),),
        ),
        ClientEntry(
            id="cline",
            name="Cline",
            config_path=str(home / ".vscode" / "cline_mcp_settings.json"),
            format="json-mcpservers",
            scope="user",
            detect_paths=(str(vscode_extensions),),
        ),
        ClientEntry(
            id="roo-code",
            name="Roo Code",
            config_path=str(home / ".vscode" / "roo_code_mcp_settings.json"),
            format="json-mcpservers",
            scope="user",
            detect_paths=(str(vscode_extensions),),
        ),
        ClientEntry(
            id="codex",
            name="OpenAI Codex",
            config_path=_project(".codex", "config.toml"),
            format="toml-codex",
            scope="project",
        ),
        ClientEntry(
            id="continue",
            name="Continue.dev",
            config_path=_project(".continue", "mcpServers", "pare.yaml"),
            format="yaml-continue",
            scope="project",
            detect_paths=(str(home / ".continue"),),
        ),
        ClientEntry(
            id="gemini",
            name="Gemini CLI",
            config_path=str(home / ".gemini" / "settings.json"),
            format="json-mcpservers",
            scope="user",
            detect_paths=(str(home / ".gemini"),),
        ),
    ]


def get_client(client_id: str, platform: str | None = None) -> ClientEntry:
    """Look up a client by id.

    Raises:
        InvalidArgument: If the id is not in the catalog
    """
    for client in get_clients(platform):
        if client.id == client_id:
            return client
    known = ", ".join(c.id for c in get_clients(platform))
    raise InvalidArgument(f"Unknown client '{client_id}'. Known clients: {known}")


def resolve_config_path(config_path: str, project_dir: str) -> str:
    """Substitute the project directory into a config path.

    Examples:
        >>> resolve_config_path("{project}/.vscode/mcp.json", "/work/app")
        '/work/app/.vscode/mcp.json'
    """
    return config_path.replace(PROJECT_PLACEHOLDER, project_dir.rstrip("/\\"))


def detect_clients(storage: Storage, clients: list[ClientEntry] | None = None) -> list[ClientEntry]:
    """Return clients with at least one existing detect path.

    ABOUTME: Clients without detect paths (Codex) are never auto-detected
    """
    if clients is None:
        clients = get_clients()
    return [
        client
        for client in clients
        if any(storage.exists(path) for path in client.detect_paths)
    ]
