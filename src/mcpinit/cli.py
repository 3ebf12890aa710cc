# CLI interface for mcpinit
import argparse
import logging
import sys
from pathlib import Path

from mcpinit import __version__
from mcpinit.clients import ClientEntry, detect_clients, get_client, get_clients, resolve_config_path
from mcpinit.errors import McpInitError
from mcpinit.merge import merge_config
from mcpinit.registry import SERVERS, select_servers
from mcpinit.storage import LocalStorage, MemoryStorage, Storage

# ABOUTME: Exit codes
# 0 = success, 1 = partial success, 2 = config error, 3 = fatal
EXIT_SUCCESS = 0
EXIT_PARTIAL = 1
EXIT_CONFIG_ERROR = 2
EXIT_FATAL = 3


def _parse_server_ids(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def _dry_run_storage(source: Storage, path: str) -> MemoryStorage:
    """Seed an in-memory store with the current contents of path."""
    existing = source.read_text(path)
    return MemoryStorage({path: existing} if existing is not None else None)


def cmd_init(args: argparse.Namespace) -> int:
    """Execute init command.

    ABOUTME: Merges selected servers into each selected (or detected) client
    ABOUTME: Continues past per-client failures, reports partial success
    """
    print(f"mcpinit init v{__version__}")
    storage = LocalStorage()

    try:
        servers = select_servers(_parse_server_ids(args.servers))
        if args.client:
            clients: list[ClientEntry] = [get_client(client_id) for client_id in args.client]
        else:
            clients = detect_clients(storage)
    except McpInitError as e:
        print(f"Error: {e}")
        return EXIT_CONFIG_ERROR

    if not clients:
        print("No MCP clients detected. Pass --client to choose one explicitly.")
        return EXIT_CONFIG_ERROR
    if not servers:
        print("No servers selected.")
        return EXIT_CONFIG_ERROR

    project_dir = str(Path(args.project).resolve())
    print(f"Adding {len(servers)} server(s) to {len(clients)} client(s)")
    print()

    failures = 0
    for client in clients:
        config_path = resolve_config_path(client.config_path, project_dir)
        try:
            target = _dry_run_storage(storage, config_path) if args.dry_run else storage
            result = merge_config(client, servers, project_dir, target)
        except McpInitError as e:
            print(f"  {client.name} - failed: {e}")
            failures += 1
            continue

        for warning in result.warnings:
            print(f"  Warning: {warning}")

        if args.dry_run:
            print(f"  {client.name} - would write {result.config_path}:")
            print()
            print(result.output)
        else:
            print(f"  {client.name} - {result.server_count} server(s) written to {result.config_path}")
            if result.backup_path:
                print(f"    backup: {result.backup_path}")

    print()
    if failures:
        print(f"Init complete: {len(clients) - failures}/{len(clients)} clients updated, {failures} failed")
        return EXIT_PARTIAL if failures < len(clients) else EXIT_FATAL

    print(f"Init complete: {len(clients)}/{len(clients)} clients updated")
    return EXIT_SUCCESS


def cmd_clients(args: argparse.Namespace) -> int:
    """List supported clients and whether each one is detected."""
    storage = LocalStorage()
    detected = {client.id for client in detect_clients(storage)}

    print(f"mcpinit clients v{__version__}")
    print()
    for client in get_clients():
        marker = "[x]" if client.id in detected else "[ ]"
        print(f"  {marker} {client.id:<16} {client.name}")
        print(f"      format: {client.format}, scope: {client.scope}")
        print(f"      config: {client.config_path}")
    print()
    print(f"Detected: {len(detected)}/{len(get_clients())} client(s)")
    return EXIT_SUCCESS


def cmd_servers(args: argparse.Namespace) -> int:
    """List the server registry."""
    print(f"mcpinit servers v{__version__}")
    print()
    for server in SERVERS:
        print(f"  {server.id:<14} {server.pkg:<22} {server.description}")
    print()
    print(f"Total: {len(SERVERS)} server(s)")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    ABOUTME: Parses arguments and dispatches to command functions
    ABOUTME: Returns exit code
    """
    parser = argparse.ArgumentParser(
        prog="mcpinit",
        description="Register Pare MCP servers in your AI clients' config files",
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"mcpinit v{__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    init_parser = subparsers.add_parser(
        "init",
        help="Add servers to client config files"
    )
    init_parser.add_argument(
        "--client", "-c",
        action="append",
        help="Client id to configure (repeatable, default: detected clients)"
    )
    init_parser.add_argument(
        "--servers", "-s",
        help="Comma-separated server ids (default: all)"
    )
    init_parser.add_argument(
        "--project", "-p",
        default=".",
        help="Project directory for project-scoped configs (default: cwd)"
    )
    init_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the resulting config without writing it"
    )

    subparsers.add_parser(
        "clients",
        help="List supported clients"
    )
    subparsers.add_parser(
        "servers",
        help="List available servers"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        if args.command == "init":
            return cmd_init(args)
        elif args.command == "clients":
            return cmd_clients(args)
        elif args.command == "servers":
            return cmd_servers(args)
        else:
            parser.print_help()
            return EXIT_SUCCESS
    except Exception as e:
        print(f"Fatal error: {e}")
        return EXIT_FATAL


if __name__ == "__main__":
    sys.exit(main())
