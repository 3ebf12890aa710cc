# Tests for command resolution
import pytest

from mcpinit.commands import is_windows, resolve_command
from mcpinit.errors import InvalidArgument
from mcpinit.models import ResolvedCommand


def test_resolve_command_posix():
    """Test npx is invoked directly on non-Windows platforms."""
    resolved = resolve_command("@paretools/git", "linux")

    assert resolved == ResolvedCommand(command="npx", args=["-y", "@paretools/git"])


def test_resolve_command_darwin():
    """Test macOS resolves the same way as Linux."""
    assert resolve_command("@paretools/git", "darwin") == resolve_command("@paretools/git", "linux")


def test_resolve_command_windows_wraps_in_shell():
    """Test Windows goes through cmd /c so npx.cmd is found on PATH."""
    resolved = resolve_command("@paretools/git", "win32")

    assert resolved.command == "cmd"
    assert resolved.args == ["/c", "npx", "-y", "@paretools/git"]


def test_platforms_differ_but_keep_runner_args_in_order():
    """Test both platforms end with -y followed by the package."""
    windows = resolve_command("@paretools/test", "win32")
    posix = resolve_command("@paretools/test", "linux")

    assert windows.command != posix.command
    assert windows.args[-2:] == ["-y", "@paretools/test"]
    assert posix.args[-2:] == ["-y", "@paretools/test"]


def test_resolve_command_is_deterministic():
    """Test repeated calls give equal results."""
    assert resolve_command("@paretools/npm", "linux") == resolve_command("@paretools/npm", "linux")


def test_resolve_command_defaults_to_host(monkeypatch):
    """Test platform falls back to sys.platform."""
    monkeypatch.setattr("mcpinit.commands.sys.platform", "win32")

    assert resolve_command("@paretools/git").command == "cmd"


@pytest.mark.parametrize("pkg", ["", "   "])
def test_resolve_command_rejects_empty_package(pkg):
    """Test empty package reference raises InvalidArgument."""
    with pytest.raises(InvalidArgument, match="must not be empty"):
        resolve_command(pkg, "linux")


def test_is_windows():
    """Test Windows family detection."""
    assert is_windows("win32")
    assert not is_windows("linux")
    assert not is_windows("darwin")
    assert not is_windows("cygwin")
