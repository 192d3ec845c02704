#!/usr/bin/env python3
# Bounding boxes of SVG sub-trees, measured on the real curve geometry
from typing import NamedTuple, Optional

from svgpathtools import parse_path
from svgpathtools.parser import parse_transform
from svgpathtools.path import transform
from svgpathtools.svg_to_paths import ellipse2pathd, polygon2pathd, polyline2pathd, rect2pathd

from svg_sprite import find_by_id, get_href, localname

IDENTITY = parse_transform(None)

CONTAINER_TAGS = {"g", "a", "svg", "switch"}

# Never rendered directly, so they do not contribute to a bounding box
SKIP_TAGS = {
    "title", "desc", "metadata", "defs", "style", "script", "symbol",
    "clipPath", "mask", "pattern", "marker", "linearGradient", "radialGradient", "filter",
}


class BBox(NamedTuple):
    x: float
    y: float
    width: float
    height: float


def element_pathd(el) -> Optional[str]:
    tag = localname(el.tag)
    if tag == "path":
        return el.get("d")
    if tag == "rect":
        return rect2pathd(dict(el.attrib))
    if tag in ("circle", "ellipse"):
        return ellipse2pathd(dict(el.attrib))
    if tag == "line":
        return "M{} {} L{} {}".format(
            el.get("x1", "0"), el.get("y1", "0"), el.get("x2", "0"), el.get("y2", "0")
        )
    if tag in ("polyline", "polygon"):
        if not el.get("points", "").strip():
            return None
        attrs = dict(el.attrib)
        return polygon2pathd(attrs) if tag == "polygon" else polyline2pathd(attrs)
    return None


def _walk(el, tf, root, seen):
    tf = tf @ parse_transform(el.get("transform"))
    tag = localname(el.tag)

    if tag in CONTAINER_TAGS:
        for child in el.iterchildren("*"):
            yield from _walk(child, tf, root, seen)
        return

    if tag == "use":
        href = get_href(el)
        if not href or not href.startswith("#") or href in seen:
            return
        target = find_by_id(root, href[1:])
        if target is None:
            return
        offset = parse_transform("translate({},{})".format(el.get("x", "0"), el.get("y", "0")))
        if localname(target.tag) == "symbol":
            for child in target.iterchildren("*"):
                yield from _walk(child, tf @ offset, root, seen | {href})
        else:
            yield from _walk(target, tf @ offset, root, seen | {href})
        return

    d = element_pathd(el)
    if d and d.strip():
        yield d, tf


def shapes(container, root=None):
    """Yield (path data, 3x3 matrix) for every rendered shape below `container`.

    The matrix maps the shape into the container's own user space: transforms
    of nested groups, shapes and <use> offsets are applied, the container's
    own transform is not.
    """
    if root is None:
        root = container.getroottree().getroot()
    for child in container.iterchildren("*"):
        if localname(child.tag) in SKIP_TAGS:
            continue
        yield from _walk(child, IDENTITY, root, frozenset())


def group_bbox(container, root=None) -> Optional[BBox]:
    """Bounding box of a container's children in the container's own user space.

    Like the DOM's getBBox(), the container's own transform is not applied but
    every transform below it is. Returns None when there is no geometry.
    """
    extents = []
    for d, tf in shapes(container, root):
        path = parse_path(d)
        if len(path) == 0:
            continue
        if (tf != IDENTITY).any():
            path = transform(path, tf)
        extents.append(path.bbox())
    if not extents:
        return None
    xmin = min(e[0] for e in extents)
    xmax = max(e[1] for e in extents)
    ymin = min(e[2] for e in extents)
    ymax = max(e[3] for e in extents)
    return BBox(xmin, ymin, xmax - xmin, ymax - ymin)
