#!/usr/bin/env python3
from __future__ import annotations

import pathlib
import re
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

import yaml

from .errors import PortfolioError

# ---------- Paths

PACKAGE_DIR = pathlib.Path(__file__).resolve().parent
TEMPLATE_DIR = PACKAGE_DIR / "templates"
DEFAULT_CONFIG_NAME = "portfolio.yml"

# ---------- Config

SOURCE_DIR_NAME = "portfolio"
OUT_DIR_NAME = "dist"
STYLESHEET_NAME = "portfolio.css"
SCRIPT_NAME = "portfolio.js"
HEADER_NAME = "header.md"
INDEX_NAME = "index.html"
ASSET_SOURCE_DIR_CANDIDATES = ("assets", "_assets")
IMAGE_EXT = ".png"
VIDEO_EXT = ".mp4"
METADATA_FORMATS = ("toml", "yaml")

PAGE_TITLE = "Portfolio"
SITE_TITLE = "portfolio"
# 1x1 transparent gif, shown until the lazily loaded video has a frame
VIDEO_POSTER = (
    "data:image/gif;base64,"
    "R0lGODlhAQABAIAAAAAAAP///yH5BAEAAAAALAAAAAABAAEAAAIBRAA7"
)

# Some shared regexes

PROJECT_FILE = re.compile(r"^\d.*\.md$", re.IGNORECASE)
ID_SEPARATOR = "-"
PROJECT_ID = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")
FRONTMATTER_FENCE = re.compile(r"^(?P<fence>---|\+\+\+)[ \t]*$")


@dataclass(frozen=True)
class BuildConfig:
    """Every path and setting one build needs, resolved up front."""

    source_dir: pathlib.Path
    out_dir: pathlib.Path
    stylesheet: pathlib.Path
    script: pathlib.Path
    header_file: pathlib.Path
    asset_dirs: Tuple[str, ...] = ASSET_SOURCE_DIR_CANDIDATES
    metadata_format: str = "toml"
    page_title: str = PAGE_TITLE
    site_title: str = SITE_TITLE
    intro: Tuple[str, ...] = ()
    video_poster: str = VIDEO_POSTER
    markdown_extensions: Tuple[str, ...] = ()
    index_name: str = INDEX_NAME

    @property
    def index_path(self) -> pathlib.Path:
        return self.out_dir / self.index_name

    @property
    def assets_out_dir(self) -> pathlib.Path:
        # Output mirrors the source layout: <out>/<source dir name>/...
        return self.out_dir / self.source_dir.name


def default_config(root: pathlib.Path) -> BuildConfig:
    root = pathlib.Path(root)
    source_dir = root / SOURCE_DIR_NAME
    return BuildConfig(
        source_dir=source_dir,
        out_dir=root / OUT_DIR_NAME,
        stylesheet=root / STYLESHEET_NAME,
        script=root / SCRIPT_NAME,
        header_file=source_dir / HEADER_NAME,
    )


_PATH_KEYS = ("source_dir", "out_dir", "stylesheet", "script", "header_file")
_TUPLE_KEYS = ("asset_dirs", "intro", "markdown_extensions")
_STR_KEYS = (
    "metadata_format",
    "page_title",
    "site_title",
    "video_poster",
    "index_name",
)


def _coerce(key: str, value: Any, root: pathlib.Path) -> Any:
    if key in _PATH_KEYS:
        if not isinstance(value, (str, pathlib.Path)):
            raise PortfolioError(f"config key {key!r} must be a path")
        p = pathlib.Path(value).expanduser()
        return p if p.is_absolute() else root / p
    if key in _TUPLE_KEYS:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)) or not all(
            isinstance(v, str) for v in value
        ):
            raise PortfolioError(f"config key {key!r} must be a list of strings")
        return tuple(value)
    if not isinstance(value, str):
        raise PortfolioError(f"config key {key!r} must be a string")
    return value


def config_from_mapping(
    data: Dict[str, Any], root: pathlib.Path
) -> BuildConfig:
    """
    Build a BuildConfig from plain settings (a parsed portfolio.yml).

    Relative paths resolve against `root`. When `source_dir` is given but
    `header_file` is not, the header follows the source directory.
    """
    unknown = set(data) - set(_PATH_KEYS + _TUPLE_KEYS + _STR_KEYS)
    if unknown:
        raise PortfolioError(
            "unknown config key(s): " + ", ".join(sorted(unknown))
        )

    cfg = default_config(root)
    values = {k: _coerce(k, v, root) for k, v in data.items() if v is not None}
    if "source_dir" in values and "header_file" not in values:
        values["header_file"] = values["source_dir"] / HEADER_NAME
    cfg = replace(cfg, **values)

    if cfg.metadata_format not in METADATA_FORMATS:
        raise PortfolioError(
            f"metadata_format must be one of {', '.join(METADATA_FORMATS)},"
            f" got {cfg.metadata_format!r}"
        )
    return cfg


def load_config(
    path: Optional[pathlib.Path] = None,
    root: Optional[pathlib.Path] = None,
    **overrides: Any,
) -> BuildConfig:
    from .utils import read_yaml

    data: Dict[str, Any] = {}
    if path is not None:
        path = pathlib.Path(path)
        if not path.exists():
            raise FileNotFoundError(f"config file not found: {path}")
        try:
            data = read_yaml(path)
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise PortfolioError(f"{path}: invalid config: {e}") from e
        if not isinstance(data, dict):
            raise PortfolioError(f"{path}: config must be a mapping")
        root = root or path.resolve().parent
    root = pathlib.Path(root) if root else pathlib.Path.cwd()

    data.update({k: v for k, v in overrides.items() if v is not None})
    return config_from_mapping(data, root)
