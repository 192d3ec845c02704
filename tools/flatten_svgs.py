#!/usr/bin/env python3
# Collapse nested group transforms into absolute path coordinates so that
# font tooling only ever sees flat <path> elements.
import sys
from pathlib import Path

from lxml import etree
from picosvg.svg import SVG
from tqdm import tqdm

from svg_sprite import create_dir, parse_svg, svg_files, to_string


def flatten_svg(data) -> str:
    svg = SVG.fromstring(to_string(parse_svg(data)))
    root = parse_svg(svg.topicosvg().tostring())
    # topicosvg always leaves a <defs>, even when there is nothing to define
    for defs in root.xpath("//*[local-name()='defs']"):
        if len(defs) == 0:
            defs.getparent().remove(defs)
    return etree.tostring(root, encoding="unicode", pretty_print=True)


def flatten_svgs(src_dir: Path, dst_dir: Path):
    create_dir(dst_dir)
    files = svg_files(src_dir)
    for src in tqdm(files, desc="Flattening", unit="icon"):
        flat = flatten_svg(src.read_bytes())
        (dst_dir / src.name).write_text(flat, encoding="utf-8")
    return len(files)


def main():
    if len(sys.argv) not in (2, 3):
        print("Usage: flatten_svgs.py <src_dir> [<dst_dir>]")
        sys.exit(2)
    src_dir = Path(sys.argv[1])
    dst_dir = Path(sys.argv[2]) if len(sys.argv) == 3 else src_dir
    if not src_dir.is_dir():
        print(f"ERROR: Not a directory: {src_dir}", file=sys.stderr)
        sys.exit(1)
    try:
        count = flatten_svgs(src_dir, dst_dir)
    except (OSError, ValueError, SyntaxError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Flattened {count} files into {dst_dir}")


if __name__ == "__main__":
    main()
