"""
TOON encoder for parsed JSON values.

Converts a JSON value tree into Token-Oriented Object Notation:
- Indentation (two spaces per level) for nested objects
- Explicit array lengths `[N]`
- Scalar lists inlined as comma-separated JSON literals
- Tables for arrays of same-shaped objects: `{fields}` header, rows on one line

Encoding only; there is no decoder.
"""
import json
import math
import re
from typing import Any, Dict, List

INDENT = "  "  # two spaces per level

# Lone surrogates survive json.loads but cannot be written as UTF-8
_SURROGATE = re.compile("[\ud800-\udfff]")


def _escape_surrogates(text: str) -> str:
    return _SURROGATE.sub(lambda m: f"\\u{ord(m.group()):04x}", text)


def _finite(value: Any) -> Any:
    """Replace non-finite floats (e.g. from 1e400) with None, as JSON has no literal for them."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, list):
        return [_finite(item) for item in value]
    if isinstance(value, dict):
        return {k: _finite(v) for k, v in value.items()}
    return value


def _literal(value: Any) -> str:
    """Render a scalar exactly as a standard JSON literal."""
    return _escape_surrogates(json.dumps(_finite(value), ensure_ascii=False))


def _is_composite(value: Any) -> bool:
    return isinstance(value, (dict, list))


def _is_scalar_list(arr: List[Any]) -> bool:
    return all(not _is_composite(item) for item in arr)


def _is_table(arr: List[Any]) -> bool:
    """
    Check whether every element is an object with the same key set.

    Key sets are compared sorted, so differing insertion order does not
    change the classification.
    """
    if not arr or not isinstance(arr[0], dict):
        return False
    first_keys = sorted(arr[0].keys())
    return all(
        isinstance(item, dict) and sorted(item.keys()) == first_keys
        for item in arr
    )


def _cell(value: Any, quote_spaces: bool) -> str:
    value = _finite(value)
    if value is None:
        return ""
    if isinstance(value, str):
        if "," in value or (quote_spaces and " " in value):
            return f'"{_escape_surrogates(value)}"'
        return _escape_surrogates(value)
    if _is_composite(value):
        return _escape_surrogates(json.dumps(value, ensure_ascii=False, separators=(",", ":")))
    return _literal(value)


def _table(arr: List[Dict[str, Any]], quote_spaces: bool) -> str:
    """Render the `{k1,...}: row row` part of a table, header first."""
    # Columns follow the first row's own key order
    keys = list(arr[0].keys())
    rows = [
        ",".join(_cell(item[k], quote_spaces) for k in keys)
        for item in arr
    ]
    return f"{{{','.join(keys)}}}: " + " ".join(rows)


def _scalar_list(arr: List[Any]) -> str:
    return ",".join(_literal(item) for item in arr)


def _encode_property(key: str, value: Any, indent_level: int, lines: List[str]):
    indent = INDENT * indent_level
    if isinstance(value, list):
        n = len(value)
        if n == 0:
            lines.append(f"{indent}{key}: []")
        elif _is_scalar_list(value):
            lines.append(f"{indent}{key}[{n}]: {_scalar_list(value)}")
        elif _is_table(value):
            lines.append(f"{indent}{key}[{n}]{_table(value, quote_spaces=True)}")
        else:
            # Mixed array: each element encoded standalone, no list markers
            lines.append(f"{indent}{key}:")
            for item in value:
                lines.append(encode(item, indent_level + 1))
    elif isinstance(value, dict):
        lines.append(f"{indent}{key}:")
        lines.append(encode(value, indent_level + 1))
    else:
        lines.append(f"{indent}{key}: {_literal(value)}")


def encode(value: Any, indent_level: int = 0) -> str:
    """
    Encode a parsed JSON value as TOON text.

    Args:
        value: JSON value (None, bool, int, float, str, list or dict)
        indent_level: Nesting depth for object properties

    Returns:
        Newline-joined TOON lines
    """
    if value is None:
        return "null"
    if not _is_composite(value):
        return _literal(value)

    if isinstance(value, list):
        if not value:
            return "[]"
        if _is_scalar_list(value):
            return f"[{len(value)}]: {_scalar_list(value)}"
        if _is_table(value):
            # Root-level tables only quote cells containing commas
            return f"[{len(value)}]{_table(value, quote_spaces=False)}"
        # Mixed arrays are dumped like an object keyed by index
        entries = ((str(i), item) for i, item in enumerate(value))
    else:
        entries = value.items()

    lines: List[str] = []
    for k, v in entries:
        _encode_property(k, v, indent_level, lines)
    return "\n".join(lines)
