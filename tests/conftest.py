import pathlib

import pytest

from portfolio.config import default_config

PNG = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"
MP4 = b"\x00\x00\x00\x18ftypmp42"


@pytest.fixture
def site(tmp_path: pathlib.Path):
    """A minimal source tree: portfolio/, portfolio.css, portfolio.js."""
    (tmp_path / "portfolio").mkdir()
    (tmp_path / "portfolio.css").write_text("body { color: red; }\n")
    (tmp_path / "portfolio.js").write_text("console.log('hi');\n")
    return default_config(tmp_path)


@pytest.fixture
def make_project(site):
    def _make(
        name="01-demo.md",
        title="Demo",
        tags=("x",),
        links=None,
        body="# Hi\n",
        extra="",
        image=True,
        video=False,
    ):
        links = links or {}
        tag_list = ", ".join(f'"{t}"' for t in tags)
        link_lines = "".join(f'{k} = "{v}"\n' for k, v in links.items())
        text = (
            "---\n"
            f'title = "{title}"\n'
            f"tags = [{tag_list}]\n"
            f"{extra}"
            "[links]\n"
            f"{link_lines}"
            "---\n"
            f"{body}"
        )
        path = site.source_dir / name
        path.write_text(text, encoding="utf-8")

        project_id = pathlib.Path(name).stem.partition("-")[2]
        if image:
            (site.source_dir / f"{project_id}.png").write_bytes(PNG)
        if video:
            (site.source_dir / f"{project_id}.mp4").write_bytes(MP4)
        return path

    return _make
