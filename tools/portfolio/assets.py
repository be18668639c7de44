from __future__ import annotations

import pathlib
import shutil
from typing import NamedTuple, Optional

from .config import IMAGE_EXT, VIDEO_EXT, BuildConfig


class ProjectAssets(NamedTuple):
    image: pathlib.Path
    video: Optional[pathlib.Path]


def ensure_dir(p: pathlib.Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def _candidate_dirs(config: BuildConfig) -> list[pathlib.Path]:
    return [config.source_dir] + [
        config.source_dir / adir for adir in config.asset_dirs
    ]


def resolve_asset_candidate(
    config: BuildConfig, fname: str
) -> Optional[pathlib.Path]:
    for base in _candidate_dirs(config):
        cand = base / fname
        if cand.exists() and cand.is_file():
            return cand
    return None


def resolve_project_assets(
    project_id: str, config: BuildConfig
) -> ProjectAssets:
    """
    Map a project id to its media by filename convention.

    - image: <id>.png in the source dir or one of its asset dirs; falls
      back to <source dir>/<id>.png without checking, publish fails later
      if it is really missing.
    - video: <id>.mp4 if (and only if) it exists right now.
    """
    image = (
        resolve_asset_candidate(config, project_id + IMAGE_EXT)
        or config.source_dir / f"{project_id}{IMAGE_EXT}"
    )
    video = resolve_asset_candidate(config, project_id + VIDEO_EXT)
    if video is not None:
        print(f"✓ video for {project_id}: {video.name}")
    return ProjectAssets(image=image, video=video)


def asset_relpath(path: pathlib.Path, config: BuildConfig) -> pathlib.PurePosixPath:
    rel = path.relative_to(config.source_dir)
    return pathlib.PurePosixPath(config.source_dir.name, *rel.parts)


def asset_url(path: pathlib.Path, config: BuildConfig) -> str:
    return f"./{asset_relpath(path, config)}"


def asset_destination(
    path: pathlib.Path, config: BuildConfig
) -> pathlib.Path:
    return config.out_dir.joinpath(*asset_relpath(path, config).parts)


def copy_file(src: pathlib.Path, dst: pathlib.Path) -> pathlib.Path:
    if not src.is_file():
        raise FileNotFoundError(f"missing file: {src}")
    ensure_dir(dst.parent)
    shutil.copy2(src, dst)
    return dst
