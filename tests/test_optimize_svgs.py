from optimize_svgs import optimize_svg, optimize_svgs
from svg_sprite import SVG_NS, parse_svg

ICON = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 16 16" width="16" height="16" '
    'shape-rendering="crispEdges">'
    "<!-- exported from the sprite -->"
    '<rect x="1" y="2" width="4" height="4"/>'
    "</svg>"
)


def test_rendering_hint_is_stripped():
    optimized = optimize_svg(ICON)
    assert "shape-rendering" not in optimized
    assert parse_svg(optimized).get("viewBox") == "0 0 16 16"


def test_comments_are_dropped_and_shapes_become_paths():
    optimized = optimize_svg(ICON)
    assert "<!--" not in optimized
    root = parse_svg(optimized)
    assert root.findall(f".//{{{SVG_NS}}}rect") == []
    assert len(root.findall(f".//{{{SVG_NS}}}path")) == 1


def test_directory_is_optimized_file_by_file(tmp_path):
    src, dst = tmp_path / "build", tmp_path / "dist"
    src.mkdir()
    (src / "a.svg").write_text(ICON, encoding="utf-8")
    (src / "b.svg").write_text(ICON.replace('x="1"', 'x="3"'), encoding="utf-8")
    (src / "notes.txt").write_text("not an icon", encoding="utf-8")

    assert optimize_svgs(src, dst) == 2
    assert sorted(p.name for p in dst.iterdir()) == ["a.svg", "b.svg"]
    assert "shape-rendering" not in (dst / "b.svg").read_text(encoding="utf-8")


def test_every_basic_shape_becomes_a_path():
    optimized = optimize_svg(
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 16 16">'
        '<circle cx="8" cy="8" r="2" fill="#f00"/>'
        '<polygon points="0,0 4,0 2,3" opacity="0.5"/>'
        '<polyline points="1,1 2,5 3,1" fill="none" stroke="#000"/>'
        '<line x1="0" y1="0" x2="4" y2="4" stroke="#000"/>'
        '<ellipse cx="4" cy="4" rx="2" ry="1"/>'
        "</svg>"
    )
    paths = parse_svg(optimized).findall(f".//{{{SVG_NS}}}path")
    assert len(paths) == 5
    assert paths[0].get("fill") == "#f00"
    assert paths[0].get("cx") is None
    assert paths[1].get("opacity") == "0.5"
    assert paths[1].get("points") is None
    assert paths[2].get("stroke") == "#000"
