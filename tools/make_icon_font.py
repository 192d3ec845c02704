#!/usr/bin/env python3
"""
Compile a directory of single-glyph SVGs into an icon font.

Writes <name>.ttf, <name>.woff2 and <name>.woff together with CSS bindings,
a JSON codepoint map and an HTML preview page.

Usage: make_icon_font.py <svg_dir> <out_dir> [font_name]
"""
import hashlib
import json
import re
import sys
from pathlib import Path
from statistics import mean

from bs4 import BeautifulSoup
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.cu2quPen import Cu2QuPen
from fontTools.pens.transformPen import TransformPen
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.svgLib.path import parse_path
from fontTools.ttLib import TTFont
from tqdm import tqdm

from svg_bbox import IDENTITY, shapes
from svg_sprite import create_dir, parse_svg, svg_files

UNITS_PER_EM = 1000
ASCENT = 850
DESCENT = -150
# First codepoint of the Private Use Area block handed out to icons
START_CODEPOINT = 0xF101

WEB_FLAVORS = {
    "woff2": "woff2",
    "woff": "woff",
}


def view_box(root):
    vb = root.get("viewBox")
    if vb:
        parts = [float(v) for v in vb.replace(",", " ").split()]
        if len(parts) == 4:
            return tuple(parts)
    width, height = root.get("width"), root.get("height")
    if width and height:
        return (0.0, 0.0, float(re.sub(r"[a-z%]+$", "", width)), float(re.sub(r"[a-z%]+$", "", height)))
    raise ValueError("SVG has neither a viewBox nor width/height")


def draw_glyph(data):
    """Return (glyph, advance width) for one icon SVG scaled to the em square.

    Group, shape and <use> transforms are applied, so icons that were not
    flattened land in the same place as flattened ones.
    """
    root = parse_svg(data)
    x, y, width, height = view_box(root)
    if height <= 0 or width <= 0:
        raise ValueError(f"Degenerate viewBox {width}x{height}")
    scale = UNITS_PER_EM / height

    tt_pen = TTGlyphPen(None)
    cu2qu_pen = Cu2QuPen(tt_pen, max_err=1.0, reverse_direction=True)
    # SVG y grows downwards, font y upwards
    pen = TransformPen(cu2qu_pen, (scale, 0, 0, -scale, -x * scale, ASCENT + y * scale))
    for d, m in shapes(root):
        if (m != IDENTITY).any():
            affine = (m[0, 0], m[1, 0], m[0, 1], m[1, 1], m[0, 2], m[1, 2])
            shape_pen = TransformPen(pen, tuple(float(v) for v in affine))
        else:
            shape_pen = pen
        parse_path(d, shape_pen)
    return tt_pen.glyph(), round(width * scale)


def assign_codepoints(names, existing=None, start: int = START_CODEPOINT) -> dict:
    """Keep codepoints of known names, hand out the next free ones to new names."""
    existing = existing or {}
    used = {existing[n] for n in names if n in existing}
    codepoints = {}
    next_cp = start
    for name in names:
        if name in existing:
            codepoints[name] = existing[name]
            continue
        while next_cp in used:
            next_cp += 1
        codepoints[name] = next_cp
        used.add(next_cp)
    return codepoints


def compute_x_avg_char_width(advances: dict) -> int:
    widths = [w for w in advances.values() if w]
    if not widths:
        return UNITS_PER_EM
    return int(round(mean(widths)))


def build_ttf(glyphs: dict, advances: dict, codepoints: dict, font_name: str, dst: Path):
    glyph_order = [".notdef"] + list(codepoints)
    glyphs = {".notdef": TTGlyphPen(None).glyph(), **glyphs}
    advances = {".notdef": UNITS_PER_EM, **advances}

    fb = FontBuilder(UNITS_PER_EM, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({cp: name for name, cp in codepoints.items()})
    fb.setupGlyf(glyphs)
    glyf = fb.font["glyf"]
    fb.setupHorizontalMetrics({
        name: (advances[name], getattr(glyf[name], "xMin", 0)) for name in glyph_order
    })
    fb.setupHorizontalHeader(ascent=ASCENT, descent=DESCENT)
    ps_name = re.sub(r"[^A-Za-z0-9-]", "", font_name) or "Icons"
    fb.setupNameTable({
        "familyName": font_name,
        "styleName": "Regular",
        "uniqueFontIdentifier": f"{ps_name}-Regular",
        "fullName": f"{font_name} Regular",
        "psName": f"{ps_name}-Regular",
        "version": "Version 1.0",
    })
    fb.setupOS2(
        xAvgCharWidth=compute_x_avg_char_width(advances),
        sTypoAscender=ASCENT,
        sTypoDescender=DESCENT,
        sTypoLineGap=0,
        usWinAscent=ASCENT,
        usWinDescent=-DESCENT,
        usFirstCharIndex=min(codepoints.values()),
        usLastCharIndex=max(codepoints.values()),
        fsType=0,
    )
    fb.setupPost()
    dst.parent.mkdir(parents=True, exist_ok=True)
    fb.save(str(dst))


def ttf_to_web(src: Path, dst: Path, flavor: str):
    font = TTFont(str(src))
    dst.parent.mkdir(parents=True, exist_ok=True)
    font.flavor = flavor
    font.save(str(dst))


def file_hash(path: Path) -> str:
    return hashlib.sha256(path.read_bytes()).hexdigest()[:16]


def css_selectors(prefix: str, name: str, aliases) -> str:
    return ",\n".join(f".{prefix}-{n}::before" for n in [name, *aliases])


def render_css(font_name: str, prefix: str, codepoints: dict, manifest: dict, fonts: dict) -> str:
    sources = [
        f'url("./{fonts["woff2"].name}?{file_hash(fonts["woff2"])}") format("woff2")',
        f'url("./{fonts["woff"].name}?{file_hash(fonts["woff"])}") format("woff")',
        f'url("./{fonts["ttf"].name}?{file_hash(fonts["ttf"])}") format("truetype")',
    ]
    lines = [
        "@font-face {",
        f'  font-family: "{font_name}";',
        "  src: " + ",\n       ".join(sources) + ";",
        "}",
        "",
        f'i[class^="{prefix}-"]::before,',
        f'i[class*=" {prefix}-"]::before {{',
        f'  font-family: "{font_name}" !important;',
        "  font-style: normal;",
        "  font-weight: normal !important;",
        "  font-variant: normal;",
        "  text-transform: none;",
        "  line-height: 1;",
        "  -webkit-font-smoothing: antialiased;",
        "  -moz-osx-font-smoothing: grayscale;",
        "}",
        "",
    ]
    for name, cp in codepoints.items():
        lines.append(css_selectors(prefix, name, manifest.get(name, [])) + " {")
        lines.append(f'  content: "\\{cp:x}";')
        lines.append("}")
    return "\n".join(lines) + "\n"


def render_html(font_name: str, prefix: str, codepoints: dict, manifest: dict, css_name: str) -> str:
    soup = BeautifulSoup("<!DOCTYPE html><html><head></head><body></body></html>", "html.parser")
    meta = soup.new_tag("meta", attrs={"charset": "utf-8"})
    soup.head.append(meta)
    title = soup.new_tag("title")
    title.string = font_name
    soup.head.append(title)
    soup.head.append(soup.new_tag("link", attrs={"rel": "stylesheet", "href": css_name}))
    style = soup.new_tag("style")
    style.string = (
        ".icons { display: flex; flex-wrap: wrap; font-family: sans-serif; }"
        ".icon { width: 10em; margin: 0.5em; text-align: center; }"
        ".icon i { font-size: 32px; }"
        ".icon .aliases { color: #888; font-size: 0.8em; }"
    )
    soup.head.append(style)

    heading = soup.new_tag("h1")
    heading.string = f"{font_name} ({len(codepoints)} icons)"
    soup.body.append(heading)

    grid = soup.new_tag("div", attrs={"class": "icons"})
    for name, cp in codepoints.items():
        cell = soup.new_tag("div", attrs={"class": "icon", "title": f"U+{cp:04X}"})
        cell.append(soup.new_tag("i", attrs={"class": f"{prefix}-{name}"}))
        label = soup.new_tag("div", attrs={"class": "name"})
        label.string = name
        cell.append(label)
        aliases = manifest.get(name, [])
        if aliases:
            alias_label = soup.new_tag("div", attrs={"class": "aliases"})
            alias_label.string = ", ".join(aliases)
            cell.append(alias_label)
        grid.append(cell)
    soup.body.append(grid)
    return str(soup)


def load_codepoints(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"Codepoint file not found: {path}")
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict) or not all(isinstance(v, int) for v in data.values()):
        raise ValueError(f"{path}: expected a JSON object of icon name -> codepoint")
    return data


def generate_font(svg_dir: Path, out_dir: Path, font_name: str = "icons", prefix: str = None,
                  manifest: dict = None, codepoints: dict = None,
                  start_codepoint: int = START_CODEPOINT) -> dict:
    files = svg_files(svg_dir)
    if not files:
        raise ValueError(f"No SVG files in {svg_dir}")
    prefix = prefix or font_name
    manifest = manifest or {}
    create_dir(out_dir)

    codepoints = assign_codepoints([f.stem for f in files], codepoints, start_codepoint)

    glyphs, advances = {}, {}
    for path in tqdm(files, desc="Building glyphs", unit="glyph"):
        glyphs[path.stem], advances[path.stem] = draw_glyph(path.read_bytes())

    outputs = {"ttf": out_dir / f"{font_name}.ttf"}
    build_ttf(glyphs, advances, codepoints, font_name, outputs["ttf"])
    for ext, flavor in WEB_FLAVORS.items():
        outputs[ext] = out_dir / f"{font_name}.{ext}"
        ttf_to_web(outputs["ttf"], outputs[ext], flavor)

    outputs["css"] = out_dir / f"{font_name}.css"
    outputs["css"].write_text(render_css(font_name, prefix, codepoints, manifest, outputs), encoding="utf-8")

    outputs["json"] = out_dir / f"{font_name}.json"
    outputs["json"].write_text(json.dumps(codepoints, indent=2) + "\n", encoding="utf-8")

    outputs["html"] = out_dir / f"{font_name}.html"
    outputs["html"].write_text(
        render_html(font_name, prefix, codepoints, manifest, outputs["css"].name), encoding="utf-8"
    )
    return outputs


def main():
    if len(sys.argv) not in (3, 4):
        print("Usage: make_icon_font.py <svg_dir> <out_dir> [font_name]")
        sys.exit(2)
    svg_dir, out_dir = Path(sys.argv[1]), Path(sys.argv[2])
    font_name = sys.argv[3] if len(sys.argv) == 4 else "icons"
    if not svg_dir.is_dir():
        print(f"ERROR: Not a directory: {svg_dir}", file=sys.stderr)
        sys.exit(1)
    try:
        outputs = generate_font(svg_dir, out_dir, font_name)
    except (OSError, ValueError, SyntaxError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
    for path in outputs.values():
        print(f"Wrote {path}")


if __name__ == "__main__":
    main()
