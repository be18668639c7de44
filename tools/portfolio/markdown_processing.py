from __future__ import annotations

from typing import Optional, Sequence

import markdown
from markupsafe import Markup

from .config import BuildConfig
from .errors import MalformedMetadata
from .utils import FRONTMATTER_ERRORS, parse_frontmatter, read_text


def render_markdown(md_text: str, extensions: Sequence[str] = ()) -> Markup:
    """
    Render a markdown body to an HTML fragment.

    The result is marked safe: whatever escaping Python-Markdown applies
    is the only escaping the fragment gets.
    """
    md = markdown.Markdown(extensions=list(extensions))
    return Markup(md.convert(md_text))


def load_header_html(config: BuildConfig) -> Optional[Markup]:
    """Render the shared header blurb, or None when there is no header.md."""
    path = config.header_file
    if not path.exists():
        print(f"- no {path.name}, using intro text from config")
        return None

    try:
        text = read_text(path)
    except UnicodeDecodeError as e:
        raise MalformedMetadata(path, "not valid UTF-8") from e
    try:
        _, body = parse_frontmatter(text, config.metadata_format)
    except FRONTMATTER_ERRORS as e:
        raise MalformedMetadata(path, f"invalid metadata block: {e}") from e
    print(f"✓ rendered {path.name}")
    return render_markdown(body, config.markdown_extensions)
