#!/usr/bin/env python3
# Strip rendering hints and minify extracted icon SVGs with picosvg
import sys
from pathlib import Path

from lxml import etree
from picosvg.svg import SVG
from tqdm import tqdm

from svg_bbox import element_pathd
from svg_sprite import SVG_NS, create_dir, localname, parse_svg, svg_files, to_string

# Non-portable rendering hint inherited from the sprite sheet
STRIP_ROOT_ATTRS = ("shape-rendering",)

# Geometry attributes of basic shapes, replaced by the path's d
SHAPE_ATTRS = {
    "rect": {"x", "y", "width", "height", "rx", "ry"},
    "circle": {"cx", "cy", "r"},
    "ellipse": {"cx", "cy", "rx", "ry"},
    "line": {"x1", "y1", "x2", "y2"},
    "polyline": {"points"},
    "polygon": {"points"},
}


def shape_to_path(el):
    """Replace a basic shape with an equivalent <path>, keeping its other attributes."""
    tag = localname(el.tag)
    parent = el.getparent()
    d = element_pathd(el)
    if not d:
        # nothing to draw
        parent.remove(el)
        return
    path = etree.Element(f"{{{SVG_NS}}}path")
    for key, value in el.attrib.items():
        if key not in SHAPE_ATTRS[tag]:
            path.set(key, value)
    path.set("d", d)
    path.tail = el.tail
    parent.replace(el, path)


def optimize_svg(data, ndigits: int = 3) -> str:
    root = parse_svg(data)
    for attr in STRIP_ROOT_ATTRS:
        root.attrib.pop(attr, None)
    for comment in list(root.iter(etree.Comment)):
        comment.getparent().remove(comment)
    for el in list(root.iter("*")):
        if localname(el.tag) in SHAPE_ATTRS:
            shape_to_path(el)

    svg = SVG.fromstring(to_string(root))
    svg.remove_nonsvg_content(inplace=True)
    svg.absolute(inplace=True)
    svg.round_floats(ndigits, inplace=True)
    return svg.tostring()


def optimize_svgs(src_dir: Path, dst_dir: Path, ndigits: int = 3):
    create_dir(dst_dir)
    files = svg_files(src_dir)
    for src in tqdm(files, desc="Optimizing", unit="icon"):
        optimized = optimize_svg(src.read_bytes(), ndigits)
        (dst_dir / src.name).write_text(optimized, encoding="utf-8")
    return len(files)


def main():
    if len(sys.argv) != 3:
        print("Usage: optimize_svgs.py <src_dir> <dst_dir>")
        sys.exit(2)
    src_dir, dst_dir = Path(sys.argv[1]), Path(sys.argv[2])
    if not src_dir.is_dir():
        print(f"ERROR: Not a directory: {src_dir}", file=sys.stderr)
        sys.exit(1)
    try:
        count = optimize_svgs(src_dir, dst_dir)
    except (OSError, ValueError, SyntaxError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Optimized {count} files into {dst_dir}")


if __name__ == "__main__":
    main()
