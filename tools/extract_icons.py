#!/usr/bin/env python3
"""
Crop every public icon out of a combined SVG sprite sheet.

Each icon in the sprite is a <g> carrying a <title> child with the icon's
name. For every such group a standalone SVG is written whose view-box is the
group's bounding box, and the icon's aliases are collected into a manifest.

Usage: extract_icons.py <sprite.svg> <aliases.json> <out_dir> <manifest.json>
"""
import copy
import json
import sys
from pathlib import Path

from lxml import etree
from tqdm import tqdm

from svg_bbox import group_bbox
from svg_sprite import SVG_NS, XLINK_NS, create_dir, get_href, find_by_id, is_hitbox, load_svg, localname, write_svg

# Children that never render
NON_RENDERED = {"title", "desc", "metadata"}

# Root attributes that describe the sprite's own canvas, not the icons
ROOT_SKIP_ATTRS = {"id", "width", "height", "viewBox", "x", "y"}


def load_aliases(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"Alias file not found: {path}")
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object of icon name -> aliases")
    aliases = {}
    for name, value in data.items():
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ValueError(f"{path}: aliases of '{name}' must be a list of strings")
        aliases[name] = value
    return aliases


def fmt(value: float) -> str:
    value = round(value, 4)
    if value == int(value):
        return str(int(value))
    return str(value)


def icon_name(title):
    return "".join(title.itertext()).strip()


def is_safe_name(name: str) -> bool:
    # the name becomes a file name inside the output directory
    return name not in (".", "..") and "/" not in name and "\\" not in name and "\0" not in name


def new_icon_root(sprite, bbox):
    nsmap = dict(sprite.nsmap)
    nsmap.setdefault(None, SVG_NS)
    nsmap.setdefault("xlink", XLINK_NS)
    root = etree.Element(f"{{{SVG_NS}}}svg", nsmap=nsmap)
    for key, value in sprite.attrib.items():
        if localname(key) not in ROOT_SKIP_ATTRS:
            root.set(key, value)
    root.set("viewBox", f"0 0 {fmt(bbox.width)} {fmt(bbox.height)}")
    root.set("width", fmt(bbox.width))
    root.set("height", fmt(bbox.height))
    return root


def clone(el):
    dup = copy.deepcopy(el)
    dup.tail = None
    for nested in list(dup.iterdescendants("*")):
        if localname(nested.tag) in NON_RENDERED:
            nested.getparent().remove(nested)
    return dup


def inline_link(sprite, child, defs, linked):
    href = get_href(child)
    if not href or not href.startswith("#"):
        return
    ref_id = href[1:]
    if ref_id in linked:
        return
    target = find_by_id(sprite, ref_id)
    if target is None:
        raise ValueError(f"Broken link {href} in icon sprite")
    defs.append(clone(target))
    linked.add(ref_id)


def crop_icon(sprite, container, inline_links: bool = True):
    """Build a standalone SVG holding a clone of `container`'s visible children.

    Returns None when the group has no measurable geometry.
    """
    bbox = group_bbox(container, sprite)
    if bbox is None:
        return None

    root = new_icon_root(sprite, bbox)
    defs = etree.SubElement(root, f"{{{SVG_NS}}}defs")
    group = etree.SubElement(root, f"{{{SVG_NS}}}g")
    if fmt(bbox.x) != "0" or fmt(bbox.y) != "0":
        group.set("transform", f"translate({fmt(-bbox.x)},{fmt(-bbox.y)})")

    linked = set()
    for child in container.iterchildren("*"):
        if localname(child.tag) in NON_RENDERED or is_hitbox(child):
            continue
        group.append(clone(child))
        if inline_links:
            # shared <defs> fragments referenced through (xlink:)href
            inline_link(sprite, child, defs, linked)
            for nested in child.iterdescendants("*"):
                inline_link(sprite, nested, defs, linked)

    if len(defs) == 0:
        root.remove(defs)
    return root


def extract_icons(sprite, aliases: dict, out_dir: Path,
                  skip_duplicates: bool = True, inline_links: bool = True) -> dict:
    create_dir(out_dir)
    manifest = {}
    titles = sprite.xpath("//*[local-name()='title']")

    for title in tqdm(titles, desc="Extracting", unit="icon"):
        name = icon_name(title)

        # Titles with spaces are descriptions, not public icons
        if not name or " " in name:
            continue
        if not is_safe_name(name):
            tqdm.write(f"WARN: '{name}' is not a valid file name, skipped")
            continue

        # Some icons repeat their own title further down; first one wins
        if skip_duplicates and name in manifest:
            continue

        container = title.getparent()
        if container is None or localname(container.tag) != "g":
            continue

        cropped = crop_icon(sprite, container, inline_links=inline_links)
        if cropped is None:
            tqdm.write(f"WARN: {name} has no geometry, skipped")
            continue

        write_svg(cropped, out_dir / f"{name}.svg")
        manifest[name] = list(aliases.get(name, []))

    return manifest


def write_manifest(manifest: dict, path: Path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(manifest, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def main():
    if len(sys.argv) != 5:
        print("Usage: extract_icons.py <sprite.svg> <aliases.json> <out_dir> <manifest.json>")
        sys.exit(2)
    sprite_path, aliases_path, out_dir, manifest_path = (Path(a) for a in sys.argv[1:])
    try:
        sprite = load_svg(sprite_path)
        aliases = load_aliases(aliases_path)
        manifest = extract_icons(sprite, aliases, out_dir)
        write_manifest(manifest, manifest_path)
    except (OSError, ValueError, SyntaxError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Extracted {len(manifest)} icons to {out_dir}")


if __name__ == "__main__":
    main()
