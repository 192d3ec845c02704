#!/usr/bin/env python3
"""
Full icon build: sprite sheet -> cropped SVGs + manifest -> optimized SVGs
-> flattened SVGs -> icon font.

Run from the project root; every path can be overridden on the command line.
"""
import argparse
import sys
from pathlib import Path

from extract_icons import extract_icons, load_aliases, write_manifest
from flatten_svgs import flatten_svgs
from make_icon_font import generate_font, load_codepoints
from optimize_svgs import optimize_svgs
from svg_sprite import create_dir, load_svg, svg_files

SPRITE = Path("src/icons.svg")
ALIASES = Path("src/icons.json")
BUILD_DIR = Path("build/icons")
DIST_DIR = Path("dist")
FONT_NAME = "icons"


def clean_svgs(directory: Path):
    """Remove icons left over from an earlier run."""
    for path in svg_files(directory):
        path.unlink()


def build(sprite_path: Path, aliases_path: Path, build_dir: Path, dist_dir: Path,
          font_name: str = FONT_NAME, prefix: str = None, codepoints_path: Path = None,
          legacy: bool = False) -> dict:
    icons_dir = dist_dir / "icons"
    font_dir = dist_dir / "font"

    sprite = load_svg(sprite_path)
    aliases = load_aliases(aliases_path)
    codepoints = load_codepoints(codepoints_path) if codepoints_path else None
    clean_svgs(create_dir(build_dir))
    clean_svgs(create_dir(icons_dir))

    print(f"Extracting icons from {sprite_path}...")
    manifest = extract_icons(sprite, aliases, build_dir,
                             skip_duplicates=not legacy, inline_links=not legacy)
    write_manifest(manifest, dist_dir / f"{font_name}.json")

    print("Optimizing icons...")
    optimize_svgs(build_dir, icons_dir)

    if not legacy:
        print("Flattening icons...")
        flatten_svgs(icons_dir, icons_dir)

    print("Generating icon font...")
    outputs = generate_font(icons_dir, font_dir, font_name, prefix=prefix,
                            manifest=manifest, codepoints=codepoints)
    for path in outputs.values():
        print(f"Wrote {path}")
    return manifest


def main(argv=None):
    parser = argparse.ArgumentParser(description="Extract icons from a sprite sheet and build an icon font")
    parser.add_argument("--sprite", type=Path, default=SPRITE, help="combined SVG sprite sheet")
    parser.add_argument("--aliases", type=Path, default=ALIASES, help="JSON of icon name -> aliases")
    parser.add_argument("--build-dir", type=Path, default=BUILD_DIR, help="scratch dir for cropped icons")
    parser.add_argument("--dist-dir", type=Path, default=DIST_DIR, help="output dir")
    parser.add_argument("--font-name", default=FONT_NAME, help="font family and output file name")
    parser.add_argument("--prefix", default=None, help="CSS class prefix (default: font name)")
    parser.add_argument("--codepoints", type=Path, default=None, help="existing codepoint JSON to keep stable")
    parser.add_argument("--legacy", action="store_true",
                        help="first revision: keep duplicates, do not inline links, do not flatten")
    args = parser.parse_args(argv)

    try:
        manifest = build(args.sprite, args.aliases, args.build_dir, args.dist_dir,
                         font_name=args.font_name, prefix=args.prefix,
                         codepoints_path=args.codepoints, legacy=args.legacy)
    except (OSError, ValueError, SyntaxError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    print(f"Built {len(manifest)} icons")
    return 0


if __name__ == "__main__":
    sys.exit(main())
