# Tests for the Continue YAML writer
import logging

import yaml

from mcpinit.models import ServerEntry
from mcpinit.registry import get_server
from mcpinit.storage import MemoryStorage
from mcpinit.writers import CONTINUE_BANNER, get_writer

GIT = get_server("pare-git")
TEST = get_server("pare-test")


def _written(storage: MemoryStorage, path: str = "/c.yaml") -> dict:
    return yaml.safe_load(storage.files[path])


def test_continue_new_file_scenario():
    """Test the two-step write: pare-git first, then pare-test appended."""
    storage = MemoryStorage()
    writer = get_writer("yaml-continue")

    writer.write("/c.yaml", [ServerEntry("pare-git", "@paretools/git")], storage, "linux")

    first = _written(storage)
    assert first["mcpServers"] == [
        {"name": "pare-git", "type": "stdio", "command": "npx", "args": ["-y", "@paretools/git"]},
    ]

    writer.write(
        "/c.yaml",
        [ServerEntry("pare-git", "@paretools/git"), ServerEntry("pare-test", "@paretools/test")],
        storage,
        "linux",
    )

    second = _written(storage)["mcpServers"]
    assert [record["name"] for record in second] == ["pare-git", "pare-test"]
    assert second[0] == first["mcpServers"][0]
    assert second[1]["args"] == ["-y", "@paretools/test"]


def test_continue_new_file_has_banner():
    """Test a fresh file carries name, version and schema."""
    storage = MemoryStorage()
    output = get_writer("yaml-continue").write("/c.yaml", [GIT], storage, "linux")

    written = _written(storage)
    for key, value in CONTINUE_BANNER.items():
        assert written[key] == value
    assert output.startswith("name: Pare Tools\n")


def test_continue_existing_banner_kept_and_completed():
    """Test a user's banner values win and missing ones are filled in."""
    storage = MemoryStorage({"/c.yaml": "\ufeffname: My Config\nschema: v1\n"})

    get_writer("yaml-continue").write("/c.yaml", [GIT], storage, "linux")

    written = _written(storage)
    assert written["name"] == "My Config"
    assert written["schema"] == "v1"
    assert written["version"] == "0.0.1"
    assert written["mcpServers"][0]["name"] == "pare-git"


def test_continue_update_in_place_keeps_extra_fields_and_position():
    """Test an existing record is updated where it is, keeping extra fields."""
    text = "\n".join([
        "name: Pare Tools",
        "version: 0.0.1",
        "schema: v1",
        "mcpServers:",
        "  - name: other",
        "    command: node",
        "    args: [server.js]",
        "  - name: pare-git",
        "    type: stdio",
        "    command: old",
        "    args: [old]",
        "    env:",
        "      GIT_PAGER: cat",
        "  - name: last",
        "    command: x",
        "",
    ])
    storage = MemoryStorage({"/c.yaml": text})

    get_writer("yaml-continue").write("/c.yaml", [GIT], storage, "linux")

    records = _written(storage)["mcpServers"]
    assert [record["name"] for record in records] == ["other", "pare-git", "last"]
    assert records[0] == {"name": "other", "command": "node", "args": ["server.js"]}
    assert records[1] == {
        "name": "pare-git",
        "type": "stdio",
        "command": "npx",
        "args": ["-y", "@paretools/git"],
        "env": {"GIT_PAGER": "cat"},
    }


def test_continue_collapses_existing_duplicates():
    """Test duplicate records for one id are merged onto the first."""
    text = "\n".join([
        "mcpServers:",
        "  - name: pare-git",
        "    command: a",
        "  - name: keep",
        "    command: b",
        "  - name: pare-git",
        "    command: c",
        "",
    ])
    storage = MemoryStorage({"/c.yaml": text})

    get_writer("yaml-continue").write("/c.yaml", [GIT], storage, "linux")

    records = _written(storage)["mcpServers"]
    assert [record["name"] for record in records] == ["pare-git", "keep"]
    assert records[0]["command"] == "npx"


def test_continue_non_dict_items_left_alone():
    """Test stray scalars in the list don't break the scan."""
    storage = MemoryStorage({"/c.yaml": "mcpServers:\n  - just-a-string\n"})

    get_writer("yaml-continue").write("/c.yaml", [GIT], storage, "linux")

    records = _written(storage)["mcpServers"]
    assert records[0] == "just-a-string"
    assert records[1]["name"] == "pare-git"


def test_continue_unrelated_top_level_keys_kept():
    """Test extra top-level keys survive."""
    storage = MemoryStorage({"/c.yaml": "name: x\nmodels:\n  - provider: openai\n"})

    get_writer("yaml-continue").write("/c.yaml", [GIT], storage, "linux")

    assert _written(storage)["models"] == [{"provider": "openai"}]


def test_continue_null_document():
    """Test a bare '---' document is treated as empty."""
    storage = MemoryStorage({"/c.yaml": "---\n"})

    result = get_writer("yaml-continue").update("/c.yaml", [GIT], storage, "linux")

    assert _written(storage)["name"] == "Pare Tools"
    assert result.warnings == []


def test_continue_malformed_starts_fresh(caplog):
    """Test malformed YAML is replaced by a fresh banner document."""
    storage = MemoryStorage({"/c.yaml": "name: [unclosed\n"})

    with caplog.at_level(logging.DEBUG, logger="mcpinit.writers"):
        result = get_writer("yaml-continue").update("/c.yaml", [GIT], storage, "linux")

    written = _written(storage)
    assert written["name"] == "Pare Tools"
    assert [record["name"] for record in written["mcpServers"]] == ["pare-git"]
    assert "Could not parse existing YAML config" in result.warnings[0]
    assert "Could not parse" in caplog.text


def test_continue_list_root_starts_fresh():
    """Test a top-level sequence is treated as a decode failure."""
    storage = MemoryStorage({"/c.yaml": "- a\n- b\n"})

    result = get_writer("yaml-continue").update("/c.yaml", [GIT], storage, "linux")

    assert _written(storage)["mcpServers"][0]["name"] == "pare-git"
    assert "expected a top-level mapping" in result.warnings[0]


def test_continue_mapping_container_replaced():
    """Test mcpServers written as a mapping is replaced by a list."""
    storage = MemoryStorage({"/c.yaml": "mcpServers:\n  pare-git:\n    command: x\n"})

    result = get_writer("yaml-continue").update("/c.yaml", [GIT], storage, "linux")

    assert _written(storage)["mcpServers"] == [
        {"name": "pare-git", "type": "stdio", "command": "npx", "args": ["-y", "@paretools/git"]},
    ]
    assert "'mcpServers' is a dict, expected a list" in result.warnings[0]
