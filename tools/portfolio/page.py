from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined
from markupsafe import Markup

from .assets import asset_url
from .config import TEMPLATE_DIR, BuildConfig
from .projects import Project

_jinja_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=StrictUndefined,
)


def _thumbnail(project: Project, config: BuildConfig) -> Dict[str, Any]:
    return {
        "id": project.project_id,
        "title": project.title,
        "tags": project.tags,
        "links": project.links,
        "about_html": project.about_html,
        "image_url": asset_url(project.image_path, config),
        "video_url": (
            asset_url(project.video_path, config)
            if project.video_path
            else None
        ),
    }


def compose_page(
    projects: Sequence[Project],
    config: BuildConfig,
    header_html: Optional[Markup] = None,
) -> str:
    """
    Render the whole portfolio page.

    Pure: the same projects and config always give the same string. Text
    fields are escaped by Jinja2; `about_html` and `header_html` are
    Markup and go in verbatim.
    """
    thumbnails: List[Dict[str, Any]] = [_thumbnail(p, config) for p in projects]
    template = _jinja_env.get_template("index.html.j2")
    return template.render(
        page_title=config.page_title,
        site_title=config.site_title,
        stylesheet=f"./{config.stylesheet.name}",
        script=f"./{config.script.name}",
        header_html=header_html,
        intro=config.intro,
        video_poster=config.video_poster,
        thumbnails=thumbnails,
    )
