# Format codecs: JSON with comments, YAML, TOML
import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import tomli
import tomli_w
import yaml

from mcpinit.errors import DecodeFailure
from mcpinit.models import DecodeResult, Document

BOM = "\ufeff"


@dataclass(frozen=True)
class Codec:
    """Decode/encode pair for one file format.

    ABOUTME: decode() raises DecodeFailure on invalid text
    ABOUTME: encode() is byte-stable across no-op re-encodes
    """
    name: str
    decode: Callable[[str], Any]
    encode: Callable[[Any], str]


def strip_bom(text: str) -> str:
    return text[1:] if text.startswith(BOM) else text


# ---------------------------------------------------------------------------
# JSON with comments
# ---------------------------------------------------------------------------


def strip_jsonc_comments(text: str) -> str:
    """Strip // and /* */ comments from JSONC using a state machine.

    ABOUTME: Tracks string literals so "https://..." values survive
    ABOUTME: Block comments become a single space, line comments keep their newline
    """
    result: list[str] = []
    i = 0
    length = len(text)
    in_string = False
    escape = False

    while i < length:
        ch = text[i]

        if in_string:
            result.append(ch)
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            result.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = length if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = length if end == -1 else end + 2
            result.append(" ")
        else:
            result.append(ch)
            i += 1

    return "".join(result)


def strip_trailing_commas(text: str) -> str:
    """Drop commas that directly precede a closing } or ].

    ABOUTME: Expects comment-free input (run strip_jsonc_comments first)
    """
    result: list[str] = []
    length = len(text)
    in_string = False
    escape = False

    for i, ch in enumerate(text):
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == ",":
            j = i + 1
            while j < length and text[j] in " \t\r\n":
                j += 1
            if j < length and text[j] in "}]":
                continue
        result.append(ch)

    return "".join(result)


def decode_jsonc(text: str) -> Any:
    """Decode JSON, tolerating comments and trailing commas."""
    cleaned = strip_trailing_commas(strip_jsonc_comments(strip_bom(text)))
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise DecodeFailure(f"Invalid JSON: {e}") from e
    except RecursionError as e:
        raise DecodeFailure("Invalid JSON: nesting too deep") from e


def encode_json(document: Any) -> str:
    """Encode as canonical 2-space JSON with a trailing newline.

    ABOUTME: Key order is preserved, comments from the source are not
    ABOUTME: Falls back to \\u escapes when the text would not encode as UTF-8
    """
    text = json.dumps(document, indent=2, ensure_ascii=False)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        text = json.dumps(document, indent=2, ensure_ascii=True)
    return text + "\n"


# ---------------------------------------------------------------------------
# YAML
# ---------------------------------------------------------------------------


def decode_yaml(text: str) -> Any:
    """Decode YAML with safe_load; no dialect leniency."""
    try:
        return yaml.safe_load(strip_bom(text))
    except yaml.YAMLError as e:
        raise DecodeFailure(f"Invalid YAML: {e}") from e
    except RecursionError as e:
        raise DecodeFailure("Invalid YAML: nesting too deep") from e


def encode_yaml(document: Any) -> str:
    """Encode as block-style YAML, keeping key order."""
    return yaml.safe_dump(
        document,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


# ---------------------------------------------------------------------------
# TOML
# ---------------------------------------------------------------------------


def decode_toml(text: str) -> Any:
    try:
        return tomli.loads(strip_bom(text))
    except tomli.TOMLDecodeError as e:
        raise DecodeFailure(f"Invalid TOML: {e}") from e
    except RecursionError as e:
        raise DecodeFailure("Invalid TOML: nesting too deep") from e


def encode_toml(document: Any) -> str:
    """Encode with tomli_w; nested tables come out as [a.b] headers."""
    return tomli_w.dumps(document)


JSONC = Codec(name="json", decode=decode_jsonc, encode=encode_json)
YAML = Codec(name="yaml", decode=decode_yaml, encode=encode_yaml)
TOML = Codec(name="toml", decode=decode_toml, encode=encode_toml)


def decode_document(
    text: str | None,
    codec: Codec,
    skeleton: Callable[[], Document],
) -> DecodeResult:
    """Decode existing file text into a mutable top-level mapping.

    ABOUTME: Absent, blank or null documents start from the skeleton silently
    ABOUTME: Invalid text or a non-mapping root starts from the skeleton with a warning
    ABOUTME: Never raises DecodeFailure

    Args:
        text: Raw file contents, or None if the file doesn't exist
        codec: Codec for the file's format
        skeleton: Factory for a fresh document

    Returns:
        DecodeResult with the document and an optional warning message
    """
    if text is None or not strip_bom(text).strip():
        return DecodeResult(document=skeleton())

    try:
        data = codec.decode(text)
        if data is None:
            return DecodeResult(document=skeleton())
        if not isinstance(data, dict):
            raise DecodeFailure(
                f"expected a top-level mapping, got {type(data).__name__}"
            )
    except DecodeFailure as e:
        return DecodeResult(
            document=skeleton(),
            warning=f"Could not parse existing {codec.name.upper()} config ({e}); starting fresh",
        )

    return DecodeResult(document=data)
