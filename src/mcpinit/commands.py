# Command resolution for npx-launched servers
import sys

from mcpinit.errors import InvalidArgument
from mcpinit.models import ResolvedCommand

RUNNER = "npx"

# ABOUTME: Windows can't spawn npx.cmd directly, so it goes through cmd /c
WINDOWS_SHELL = "cmd"
WINDOWS_SHELL_FLAG = "/c"


def is_windows(platform: str | None = None) -> bool:
    """Return True for the Windows platform family (sys.platform style names)."""
    if platform is None:
        platform = sys.platform
    return platform.startswith("win")


def resolve_command(pkg: str, platform: str | None = None) -> ResolvedCommand:
    """Build the command line that launches a server package.

    ABOUTME: Pure function, same inputs always give equal results
    ABOUTME: platform defaults to the host's sys.platform

    Args:
        pkg: npm package reference, e.g. "@paretools/git"
        platform: sys.platform style name ("win32", "linux", "darwin")

    Returns:
        ResolvedCommand for the platform

    Raises:
        InvalidArgument: If pkg is empty

    Examples:
        >>> resolve_command("@paretools/git", "linux")
        ResolvedCommand(command='npx', args=['-y', '@paretools/git'])
        >>> resolve_command("@paretools/git", "win32")
        ResolvedCommand(command='cmd', args=['/c', 'npx', '-y', '@paretools/git'])
    """
    if not pkg or not pkg.strip():
        raise InvalidArgument("Package reference must not be empty")

    if is_windows(platform):
        return ResolvedCommand(
            command=WINDOWS_SHELL,
            args=[WINDOWS_SHELL_FLAG, RUNNER, "-y", pkg],
        )
    return ResolvedCommand(command=RUNNER, args=["-y", pkg])
