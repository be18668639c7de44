from __future__ import annotations

import pathlib
from typing import List, Sequence

from .assets import asset_destination, copy_file, ensure_dir
from .config import BuildConfig
from .projects import Project


def publish(
    html: str, projects: Sequence[Project], config: BuildConfig
) -> List[pathlib.Path]:
    """
    Write index.html, then copy the static files and project media.

    There is no rollback: index.html is written first, so a later missing
    image leaves it (and whatever was copied so far) on disk.
    """
    ensure_dir(config.out_dir)
    ensure_dir(config.assets_out_dir)

    written: List[pathlib.Path] = []

    config.index_path.write_text(html, encoding="utf-8")
    written.append(config.index_path)
    print(f"✓ wrote {config.index_path}")

    for static in (config.stylesheet, config.script):
        written.append(copy_file(static, config.out_dir / static.name))

    for project in projects:
        if not project.image_path.is_file():
            raise FileNotFoundError(
                f"missing image for project {project.project_id}: "
                f"{project.image_path}"
            )
        written.append(
            copy_file(
                project.image_path,
                asset_destination(project.image_path, config),
            )
        )
        if project.video_path:
            written.append(
                copy_file(
                    project.video_path,
                    asset_destination(project.video_path, config),
                )
            )

    print(f"✓ published {len(written)} files to {config.out_dir}")
    return written
