#!/usr/bin/env python3
"""
Static portfolio builder.

- Projects -> one thumbnail each on dist/index.html
  source: portfolio/<n>-<id>.md, a TOML (or YAML) metadata block
  with title, tags, links, then a markdown "about" body
- Media by convention: portfolio/<id>.png (required), portfolio/<id>.mp4
  (optional, looked up on disk), also searched in assets/ and _assets/
- portfolio/header.md, if present, replaces the intro text in the header
- portfolio.css and portfolio.js copied next to index.html
- Media copied to dist/portfolio/ keeping the source layout

Any bad file stops the build; nothing is skipped silently.
"""

from __future__ import annotations

import argparse
import pathlib
import sys
from typing import List, Optional

from .config import DEFAULT_CONFIG_NAME, BuildConfig, load_config
from .errors import PortfolioError
from .markdown_processing import load_header_html
from .page import compose_page
from .projects import load_projects
from .publish import publish


def build(config: BuildConfig) -> pathlib.Path:
    projects = load_projects(config)
    header_html = load_header_html(config)
    html = compose_page(projects, config, header_html=header_html)
    publish(html, projects, config)
    return config.index_path


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="portfolio-build",
        description="Build the portfolio page from markdown project files.",
    )
    parser.add_argument(
        "--config",
        type=pathlib.Path,
        help=f"YAML settings file (default: ./{DEFAULT_CONFIG_NAME} if present)",
    )
    parser.add_argument(
        "--source", type=pathlib.Path, help="directory holding project files"
    )
    parser.add_argument("--out", type=pathlib.Path, help="output directory")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    config_path = args.config
    if config_path is None:
        default = pathlib.Path.cwd() / DEFAULT_CONFIG_NAME
        config_path = default if default.exists() else None

    try:
        config = load_config(
            config_path,
            source_dir=args.source.resolve() if args.source else None,
            out_dir=args.out.resolve() if args.out else None,
        )
        index = build(config)
    except (PortfolioError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"✓ done: {index}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
