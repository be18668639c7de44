from __future__ import annotations

import pathlib
import re
import tomllib
from typing import Any, Dict, Optional, Tuple

import yaml

from .config import FRONTMATTER_FENCE

# Anything the metadata engines raise on a bad block
FRONTMATTER_ERRORS = (tomllib.TOMLDecodeError, yaml.YAMLError)


def natural_key(s: str):
    return [int(t) if t.isdigit() else t for t in re.split(r'(\d+)', s.lower())]


def read_yaml(path: pathlib.Path) -> Dict[str, Any]:
    if path.exists():
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return {}


def read_text(path: pathlib.Path) -> str:
    return _norm_text(path.read_text(encoding="utf-8"))


def _norm_text(s: str) -> str:
    return s.replace('\r\n', '\n').replace('\r', '\n').lstrip('\ufeff')


def _load_block(fm_text: str, fmt: str) -> Any:
    if fmt == "toml":
        return tomllib.loads(fm_text)
    return yaml.safe_load(fm_text) or {}


def parse_frontmatter(
    text: str, fmt: str = "toml"
) -> Tuple[Optional[Dict[str, Any]], str]:
    """
    Split a document into its metadata block and body.

    The block opens on the first non-blank line with `---` (parsed with
    `fmt`) or `+++` (always TOML) and closes on the next line holding the
    same fence. Returns (None, text) when no complete block is found.
    Parser errors (tomllib.TOMLDecodeError, yaml.YAMLError) propagate.
    """
    lines = text.splitlines(keepends=True)
    start = 0
    while start < len(lines) and lines[start].strip() == "":
        start += 1
    if start == len(lines):
        return None, text

    m = FRONTMATTER_FENCE.match(lines[start].rstrip("\n"))
    if not m:
        return None, text
    fence = m.group("fence")
    if fence == "+++":
        fmt = "toml"

    for i in range(start + 1, len(lines)):
        if lines[i].strip() == fence:
            fm_text = "".join(lines[start + 1 : i])
            body = "".join(lines[i + 1 :])
            return _load_block(fm_text, fmt), body
    return None, text
