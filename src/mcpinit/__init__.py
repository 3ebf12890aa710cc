# mcpinit - Register MCP tool servers in client config files
# ABOUTME: Version information
__version__ = "0.1.0"

# ABOUTME: Export core data models and errors
from mcpinit.errors import DecodeFailure, InvalidArgument, McpInitError, StorageFailure
from mcpinit.models import ResolvedCommand, ServerEntry

# ABOUTME: Export the merge engine
from mcpinit.clients import ClientEntry, detect_clients, get_client, get_clients
from mcpinit.commands import resolve_command
from mcpinit.merge import MergeResult, merge_config
from mcpinit.registry import SERVERS, select_servers
from mcpinit.storage import LocalStorage, MemoryStorage, Storage
from mcpinit.writers import WRITERS, ConfigWriter, get_writer, write_config

__all__ = [
    "__version__",
    "ServerEntry",
    "ResolvedCommand",
    "McpInitError",
    "StorageFailure",
    "DecodeFailure",
    "InvalidArgument",
    "ClientEntry",
    "get_clients",
    "get_client",
    "detect_clients",
    "resolve_command",
    "MergeResult",
    "merge_config",
    "SERVERS",
    "select_servers",
    "Storage",
    "LocalStorage",
    "MemoryStorage",
    "ConfigWriter",
    "WRITERS",
    "get_writer",
    "write_config",
]
