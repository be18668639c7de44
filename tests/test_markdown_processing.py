import dataclasses

import pytest
from markupsafe import Markup

from portfolio.errors import MalformedMetadata
from portfolio.markdown_processing import load_header_html, render_markdown


def test_render_heading():
    html = render_markdown("# Hi\n")
    assert html == "<h1>Hi</h1>"
    assert isinstance(html, Markup)


def test_raw_html_passes_text_is_escaped():
    html = render_markdown("<b>bold</b> & a < b\n")
    assert "<b>bold</b>" in html
    assert "&amp;" in html
    assert "&lt;" in html


def test_render_is_deterministic():
    text = "Some *text*\n\n- a\n- b\n"
    assert render_markdown(text) == render_markdown(text)


def test_extensions_are_passed_through():
    table = "| a | b |\n|---|---|\n| 1 | 2 |\n"
    assert "<table>" not in render_markdown(table)
    assert "<table>" in render_markdown(table, ["tables"])


def test_no_header_file(site, capsys):
    assert load_header_html(site) is None
    assert "no header.md" in capsys.readouterr().out


def test_header_file(site):
    site.header_file.write_text("Welcome to my *portfolio*.\n")
    assert load_header_html(site) == "<p>Welcome to my <em>portfolio</em>.</p>"


def test_header_metadata_block_is_stripped(site):
    site.header_file.write_text('---\ntitle = "ignored"\n---\nHello\n')
    assert load_header_html(site) == "<p>Hello</p>"


def test_bad_header_metadata(site):
    cfg = dataclasses.replace(site, metadata_format="yaml")
    cfg.header_file.write_text("---\nkey: [oops\n---\nHello\n")
    with pytest.raises(MalformedMetadata):
        load_header_html(cfg)


def test_non_utf8_header(site):
    site.header_file.write_bytes(b"caf\xe9\n")
    with pytest.raises(MalformedMetadata, match="not valid UTF-8"):
        load_header_html(site)
