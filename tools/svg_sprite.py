#!/usr/bin/env python3
# Shared helpers for loading, searching and writing SVG documents
from pathlib import Path
from lxml import etree

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

_parser = etree.XMLParser(remove_blank_text=True, no_network=True, resolve_entities=False)


def localname(tag) -> str:
    if not isinstance(tag, str):
        # comments and processing instructions
        return ""
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def create_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def load_svg(path: Path):
    if not path.exists():
        raise FileNotFoundError(f"SVG file not found: {path}")
    return etree.parse(str(path), _parser).getroot()


def parse_svg(data):
    if isinstance(data, str):
        data = data.encode("utf-8")
    return etree.fromstring(data, _parser)


def to_string(root) -> str:
    return etree.tostring(root, encoding="unicode")


def write_svg(root, path: Path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(etree.tostring(root, xml_declaration=True, encoding="utf-8", pretty_print=True))


def get_href(el):
    return el.get(f"{{{XLINK_NS}}}href") or el.get("href")


def find_by_id(root, el_id: str):
    found = root.xpath("//*[@id=$id]", id=el_id)
    return found[0] if found else None


def style_value(el, prop: str):
    """Value of a presentation property, inline style taking precedence over the attribute."""
    for chunk in el.get("style", "").split(";"):
        key, sep, value = chunk.partition(":")
        if sep and key.strip() == prop:
            return value.strip()
    value = el.get(prop)
    return value.strip() if value is not None else None


def is_hitbox(el) -> bool:
    """True for unfilled, unstroked shapes, the invisible backgrounds that size an icon."""
    if style_value(el, "fill") != "none":
        return False
    return style_value(el, "stroke") in (None, "none")


def svg_files(directory: Path):
    return sorted(p for p in directory.glob("*.svg") if p.is_file())
