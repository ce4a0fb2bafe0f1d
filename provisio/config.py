"""Catalog file loading and JSON-ish preprocessing."""

import json
import re
from pathlib import Path


class ConfigError(Exception):
    """Raised when a catalog file cannot be read, parsed or validated.

    Syntax errors carry the line, column and a caret under the offending
    character.
    """


# Shell metacharacters that would hide arbitrary command substitution
DANGEROUS_PATTERNS = [r"\$\(", r"`"]


def is_command_safe(command: str) -> bool:
    if not command:
        return False
    return not any(re.search(pattern, command) for pattern in DANGEROUS_PATTERNS)


def preprocess_jsonish(text: str) -> str:
    """Turn JSON-ish text into strict JSON.

    ``//`` line comments and trailing commas before ``]``/``}`` are replaced
    with spaces so line and column numbers in parse errors still point at
    the original text. String contents are left untouched.
    """
    out = list(text)
    n = len(text)
    i = 0
    in_string = False

    while i < n:
        char = text[i]
        if in_string:
            if char == "\\":
                i += 2
                continue
            if char == '"':
                in_string = False
            i += 1
            continue

        if char == '"':
            in_string = True
        elif char == "/" and i + 1 < n and text[i + 1] == "/":
            while i < n and text[i] != "\n":
                out[i] = " "
                i += 1
            continue
        elif char == ",":
            j = i + 1
            while j < n:
                if text[j] in " \t\r\n":
                    j += 1
                elif text[j] == "/" and j + 1 < n and text[j + 1] == "/":
                    while j < n and text[j] != "\n":
                        j += 1
                else:
                    break
            if j < n and text[j] in "]}":
                out[i] = " "
        i += 1

    return "".join(out)


def _format_syntax_error(original_text: str, error: json.JSONDecodeError) -> str:
    lines = original_text.split("\n")
    parts = [f"Catalog syntax error at line {error.lineno}, col {error.colno}: {error.msg}"]
    if 1 <= error.lineno <= len(lines):
        parts.append(lines[error.lineno - 1])
        parts.append(" " * (error.colno - 1) + "^")
    return "\n".join(parts)


def load_config(path_or_text: Path | str) -> dict:
    """Parse a JSON-ish catalog from a Path or from raw text.

    Raises:
        ConfigError: If the file cannot be read, has syntax errors, or is not
            a JSON object.
        TypeError: If path_or_text is neither Path nor str.
    """
    if isinstance(path_or_text, Path):
        try:
            original_text = path_or_text.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise ConfigError(f"Catalog file not found: {path_or_text}")
        except PermissionError:
            raise ConfigError(f"Permission denied reading catalog file: {path_or_text}")
        except UnicodeDecodeError:
            raise ConfigError(f"Catalog file is not valid UTF-8: {path_or_text}")
        except OSError as e:
            raise ConfigError(f"Error reading catalog file {path_or_text}: {e}")
    elif isinstance(path_or_text, str):
        original_text = path_or_text
    else:
        raise TypeError(
            f"path_or_text must be Path or str, got {type(path_or_text).__name__}"
        )

    try:
        result = json.loads(preprocess_jsonish(original_text))
    except json.JSONDecodeError as e:
        raise ConfigError(_format_syntax_error(original_text, e)) from e

    if not isinstance(result, dict):
        raise ConfigError(f"Catalog must be a JSON object, got {type(result).__name__}")

    return result


__all__ = [
    "ConfigError",
    "DANGEROUS_PATTERNS",
    "is_command_safe",
    "preprocess_jsonish",
    "load_config",
]
