# Registry of available Pare tool servers
from collections.abc import Iterable

from mcpinit.errors import InvalidArgument
from mcpinit.models import ServerEntry

# ABOUTME: Immutable catalog, ordered as presented to the user
SERVERS: tuple[ServerEntry, ...] = (
    ServerEntry("pare-git", "@paretools/git", "git status, log, diff, commit, branch and more"),
    ServerEntry("pare-github", "@paretools/github", "GitHub PRs, issues, releases via gh"),
    ServerEntry("pare-test", "@paretools/test", "Run jest, vitest, mocha, pytest, playwright"),
    ServerEntry("pare-npm", "@paretools/npm", "npm, pnpm, yarn and nvm"),
    ServerEntry("pare-build", "@paretools/build", "tsc, esbuild, vite, webpack, rollup, nx, turbo"),
    ServerEntry("pare-lint", "@paretools/lint", "eslint, prettier, biome, shellcheck, hadolint"),
    ServerEntry("pare-python", "@paretools/python", "pip, uv, pytest, black, conda, pyenv"),
    ServerEntry("pare-cargo", "@paretools/cargo", "cargo build, test, clippy, fmt, audit"),
    ServerEntry("pare-go", "@paretools/go", "go build, test, vet, generate, get"),
    ServerEntry("pare-docker", "@paretools/docker", "docker and docker compose"),
    ServerEntry("pare-k8s", "@paretools/k8s", "kubectl and helm"),
    ServerEntry("pare-process", "@paretools/process", "Run arbitrary commands with structured output"),
    ServerEntry("pare-search", "@paretools/search", "ripgrep, fd and yq"),
)


def get_server(server_id: str) -> ServerEntry:
    """Look up a registry entry by id.

    Raises:
        InvalidArgument: If no entry has that id
    """
    for server in SERVERS:
        if server.id == server_id:
            return server
    raise InvalidArgument(f"Unknown server '{server_id}'")


def select_servers(server_ids: Iterable[str] | None = None) -> list[ServerEntry]:
    """Select registry entries by id, preserving the caller's order.

    ABOUTME: None selects the whole registry
    ABOUTME: Unknown ids fail fast with InvalidArgument

    Examples:
        >>> [s.id for s in select_servers(["pare-test", "pare-git"])]
        ['pare-test', 'pare-git']
    """
    if server_ids is None:
        return list(SERVERS)
    return [get_server(server_id) for server_id in server_ids]
