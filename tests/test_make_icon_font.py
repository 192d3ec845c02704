import json

import pytest
from fontTools.ttLib import TTFont

from make_icon_font import ASCENT, DESCENT, START_CODEPOINT, UNITS_PER_EM, assign_codepoints, generate_font

SQUARE = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 16 16"><path d="M0 0 L16 0 L16 16 L0 16 Z"/></svg>'
WIDE = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 32 16"><path d="M0 8 L32 0 L32 16 Z"/></svg>'


@pytest.fixture
def svg_dir(tmp_path):
    path = tmp_path / "icons"
    path.mkdir()
    (path / "square.svg").write_text(SQUARE, encoding="utf-8")
    (path / "wide.svg").write_text(WIDE, encoding="utf-8")
    return path


def test_assign_codepoints_keeps_known_names():
    codepoints = assign_codepoints(["a", "b", "c"], {"b": START_CODEPOINT, "gone": 0xF200})
    assert codepoints == {"a": START_CODEPOINT + 1, "b": START_CODEPOINT, "c": START_CODEPOINT + 2}


def test_assign_codepoints_from_scratch():
    assert assign_codepoints(["x", "y"], start=0xE000) == {"x": 0xE000, "y": 0xE001}


def test_font_files_are_written(svg_dir, tmp_path):
    outputs = generate_font(svg_dir, tmp_path / "font", "test-icons")
    assert sorted(outputs) == ["css", "html", "json", "ttf", "woff", "woff2"]
    for path in outputs.values():
        assert path.exists()
        assert path.name.startswith("test-icons.")

    assert TTFont(str(outputs["woff2"])).flavor == "woff2"
    assert TTFont(str(outputs["woff"])).flavor == "woff"


def test_glyphs_are_mapped_and_scaled(svg_dir, tmp_path):
    outputs = generate_font(svg_dir, tmp_path / "font", "test-icons")
    font = TTFont(str(outputs["ttf"]))
    assert font.getBestCmap() == {START_CODEPOINT: "square", START_CODEPOINT + 1: "wide"}

    square = font["glyf"]["square"]
    assert (square.xMin, square.yMin, square.xMax, square.yMax) == (0, DESCENT, UNITS_PER_EM, ASCENT)
    assert font["hmtx"]["square"][0] == UNITS_PER_EM
    assert font["hmtx"]["wide"][0] == 2 * UNITS_PER_EM

    assert json.loads(outputs["json"].read_text(encoding="utf-8")) == {
        "square": START_CODEPOINT,
        "wide": START_CODEPOINT + 1,
    }


def test_css_has_rules_for_icons_and_aliases(svg_dir, tmp_path):
    outputs = generate_font(svg_dir, tmp_path / "font", "test-icons", prefix="ti",
                            manifest={"square": ["box"]})
    css = outputs["css"].read_text(encoding="utf-8")
    assert '@font-face' in css
    assert 'url("./test-icons.woff2?' in css
    assert ".ti-square::before,\n.ti-box::before {" in css
    assert '.ti-wide::before {\n  content: "\\f102";' in css


def test_html_preview_lists_icons(svg_dir, tmp_path):
    outputs = generate_font(svg_dir, tmp_path / "font", "test-icons", manifest={"wide": ["banner"]})
    html = outputs["html"].read_text(encoding="utf-8")
    assert 'href="test-icons.css"' in html
    assert 'class="test-icons-square"' in html
    assert "banner" in html


def test_existing_codepoints_are_reused(svg_dir, tmp_path):
    outputs = generate_font(svg_dir, tmp_path / "font", codepoints={"wide": 0xE900})
    font = TTFont(str(outputs["ttf"]))
    assert font.getBestCmap()[0xE900] == "wide"
    assert font.getBestCmap()[START_CODEPOINT] == "square"


def test_empty_directory_is_an_error(tmp_path):
    with pytest.raises(ValueError):
        generate_font(tmp_path, tmp_path / "font")
