# Exception types for mcpinit
# ABOUTME: StorageFailure is fatal for one invocation, DecodeFailure is recovered
# ABOUTME: by the writers, InvalidArgument signals a programmer error


class McpInitError(Exception):
    """Base class for all mcpinit errors."""


class StorageFailure(McpInitError, OSError):
    """Read, write or backup of a config file failed.

    ABOUTME: Wraps the underlying OSError (available as __cause__)
    ABOUTME: Never retried internally
    """


class DecodeFailure(McpInitError, ValueError):
    """Text is not valid for the target format.

    ABOUTME: Raised by codecs, caught by decode_document()
    ABOUTME: Also raised when a document decodes to the wrong container kind
    """


class InvalidArgument(McpInitError, ValueError):
    """Malformed input from the caller (empty package, unknown id)."""
