from __future__ import annotations

import pathlib
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from markupsafe import Markup

from .assets import resolve_project_assets
from .config import ID_SEPARATOR, PROJECT_FILE, PROJECT_ID, BuildConfig
from .errors import DuplicateProjectId, MalformedMetadata
from .markdown_processing import render_markdown
from .utils import FRONTMATTER_ERRORS, natural_key, parse_frontmatter, read_text


@dataclass(frozen=True)
class Project:
    project_id: str
    title: str
    tags: Tuple[str, ...]
    links: Tuple[Tuple[str, str], ...]
    image_path: pathlib.Path
    video_path: Optional[pathlib.Path]
    about_html: Markup
    source: pathlib.Path


def is_project_file(path: pathlib.Path) -> bool:
    return path.is_file() and bool(PROJECT_FILE.match(path.name))


def derive_project_id(path: pathlib.Path) -> Optional[str]:
    """`01-demo.md` -> `demo`; None when the stem has no separator."""
    _, sep, project_id = path.stem.partition(ID_SEPARATOR)
    if not sep or not project_id:
        return None
    return project_id


def _check_metadata(path: pathlib.Path, fm: Any) -> Dict[str, Any]:
    if not isinstance(fm, dict):
        raise MalformedMetadata(path, "metadata block must be a table/mapping")

    for key in ("title", "tags", "links"):
        if key not in fm:
            raise MalformedMetadata(path, f"missing required field {key!r}")

    if not isinstance(fm["title"], str):
        raise MalformedMetadata(path, "'title' must be a string")
    tags = fm["tags"]
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        raise MalformedMetadata(path, "'tags' must be a list of strings")
    links = fm["links"]
    if not isinstance(links, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in links.items()
    ):
        raise MalformedMetadata(
            path, "'links' must map link names to URL strings"
        )
    if "id" in fm and (
        not isinstance(fm["id"], str)
        or not PROJECT_ID.match(fm["id"])
        or ".." in fm["id"]
    ):
        raise MalformedMetadata(
            path, "'id' must be a plain name (letters, digits, _ . -)"
        )
    return fm


def parse_metadata(
    path: pathlib.Path, config: BuildConfig
) -> Tuple[Dict[str, Any], str]:
    """Read a project file and return (validated metadata, markdown body)."""
    try:
        text = read_text(path)
    except UnicodeDecodeError as e:
        raise MalformedMetadata(path, "not valid UTF-8") from e
    try:
        fm, body = parse_frontmatter(text, config.metadata_format)
    except FRONTMATTER_ERRORS as e:
        raise MalformedMetadata(path, f"invalid metadata block: {e}") from e
    if fm is None:
        raise MalformedMetadata(path, "no metadata block at top of file")
    return _check_metadata(path, fm), body


def parse_project(path: pathlib.Path, config: BuildConfig) -> Project:
    fm, body = parse_metadata(path, config)

    derived = derive_project_id(path)
    project_id = fm.get("id") or derived
    if project_id is None:
        raise MalformedMetadata(
            path,
            f"cannot derive a project id from the file name "
            f"(expected <n>{ID_SEPARATOR}<id>.md) and no 'id' field is set",
        )
    if derived is not None and derived != project_id:
        print(f"! {path.name}: id {project_id!r} does not match file name")

    assets = resolve_project_assets(project_id, config)

    return Project(
        project_id=project_id,
        title=fm["title"],
        tags=tuple(fm["tags"]),
        links=tuple(sorted(fm["links"].items())),
        image_path=assets.image,
        video_path=assets.video,
        about_html=render_markdown(body, config.markdown_extensions),
        source=path,
    )


def load_projects(config: BuildConfig) -> List[Project]:
    """
    Parse every project file directly under the source dir.

    Only `.md` files whose name starts with a digit count; anything else
    (header.md, notes) is ignored. Files are taken in natural name order,
    so the numeric prefix orders the page. The first bad file aborts.
    """
    src = config.source_dir
    if not src.is_dir():
        raise FileNotFoundError(f"source directory not found: {src}")

    files = sorted(
        (p for p in src.iterdir() if is_project_file(p)),
        key=lambda p: natural_key(p.name),
    )

    projects: List[Project] = []
    seen: Dict[str, pathlib.Path] = {}
    for path in files:
        project = parse_project(path, config)
        if project.project_id in seen:
            raise DuplicateProjectId(
                project.project_id, seen[project.project_id], path
            )
        seen[project.project_id] = path
        projects.append(project)
        print(f"✓ project {project.project_id} ({path.name})")

    if not projects:
        print(f"- no project files in {src}")
    return projects
