"""JSON-compatible views of parse results.

Converts blocks, inlines and tokens to plain dicts for the CLI and for
debugging. Enum members become their lower-case names. Output is
deterministic (sorted keys).

Example:
    from notemark import parse_blocks
    from notemark.serialization import to_json

    print(to_json(parse_blocks("# Hello **World**")))
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

from .models import Block, Inline, TableData, Token


def _to_data(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.name.lower()
    if isinstance(value, TableData):
        data = {field.name: _to_data(getattr(value, field.name)) for field in fields(value)}
        data["column_count"] = value.column_count
        return data
    if is_dataclass(value) and not isinstance(value, type):
        return {field.name: _to_data(getattr(value, field.name)) for field in fields(value)}
    if isinstance(value, (list, tuple)):
        return [_to_data(item) for item in value]
    return value


def block_to_dict(block: Block) -> dict[str, Any]:
    return _to_data(block)


def inline_to_dict(inline: Inline) -> dict[str, Any]:
    return _to_data(inline)


def token_to_dict(token: Token) -> dict[str, Any]:
    return _to_data(token)


def to_json(items: Iterable[Block | Inline | Token], indent: int | None = 2) -> str:
    """Serialize parse results to a JSON array.

    Args:
        items: Blocks, inlines or tokens.
        indent: Indentation passed to `json.dumps`; None for compact output.

    Returns:
        str: JSON text.
    """
    return json.dumps(
        [_to_data(item) for item in items], ensure_ascii=False, indent=indent, sort_keys=True
    )
