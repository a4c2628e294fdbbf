"""Utility functions for artifact generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from pathlib import Path


def _to_dict(obj: object) -> object:
    """Convert object to dict for JSON serialization."""
    from dataclasses import asdict, is_dataclass

    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    return obj


def _write_json(path: Path, obj: object, *, sort_keys: bool = True) -> None:
    payload = _to_dict(obj)
    opts = orjson.OPT_INDENT_2
    if sort_keys:
        opts |= orjson.OPT_SORT_KEYS
    path.write_bytes(orjson.dumps(payload, option=opts))


def _write_edgelist(path: Path, edges: list[tuple[str, str]]) -> None:
    with path.open("w", encoding="utf-8") as f:
        for source, target in edges:
            f.write(f"{source} -> {target}\n")


def _get_output_dir_name(out_dir: Path, root: Path) -> str:
    """Get the output directory name for filtering."""
    try:
        if out_dir.is_relative_to(root):
            rel = out_dir.relative_to(root)
            if rel.parts:
                return rel.parts[0]
            return ""
    except ValueError:
        # Non-comparable paths mean out_dir is external; avoid filtering.
        return ""
    return ""
