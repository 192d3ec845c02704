import json

import pytest

from svg_sprite import parse_svg

SPRITE = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink"
     width="100" height="100" viewBox="0 0 100 100" shape-rendering="crispEdges">
  <defs>
    <path id="shared-dot" d="M0 0 H2 V2 H0 Z"/>
  </defs>
  <g id="edit-copy">
    <title>edit-copy</title>
    <rect x="10" y="20" width="16" height="16" style="fill:none;stroke:none"/>
    <path d="M12 22 H24 V34 H12 Z" fill="#000"/>
  </g>
  <g>
    <title>not a public icon</title>
    <rect x="40" y="40" width="8" height="8"/>
  </g>
  <g transform="translate(50,0)">
    <title>go-next</title>
    <g transform="translate(2,3)">
      <rect x="0" y="0" width="4" height="6"/>
    </g>
    <g>
      <title>go-next</title>
      <rect x="1" y="1" width="1" height="1"/>
    </g>
  </g>
  <g>
    <title>emblem</title>
    <use xlink:href="#shared-dot" x="5" y="5"/>
  </g>
  <title>orphan</title>
</svg>
"""

# Only shapes that survive the whole optimize/flatten/font chain
SIMPLE_SPRITE = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="64" height="64" viewBox="0 0 64 64"
     shape-rendering="crispEdges">
  <g>
    <title>edit-copy</title>
    <rect x="10" y="20" width="16" height="16" fill="none"/>
    <path d="M12 22 H24 V34 H12 Z"/>
  </g>
  <g transform="translate(32,0)">
    <title>go-next</title>
    <g transform="translate(2,3)">
      <path d="M0 0 L8 4 L0 8 Z"/>
    </g>
  </g>
  <g>
    <title>do not ship</title>
    <path d="M40 40 H48 V48 H40 Z"/>
  </g>
</svg>
"""

ALIASES = {
    "edit-copy": ["copy", "duplicate"],
    "unused-icon": ["nothing"],
}


@pytest.fixture
def sprite():
    return parse_svg(SPRITE)


@pytest.fixture
def aliases():
    return {k: list(v) for k, v in ALIASES.items()}


@pytest.fixture
def project(tmp_path):
    """A project tree laid out like the build expects."""
    src = tmp_path / "src"
    src.mkdir()
    (src / "icons.svg").write_text(SIMPLE_SPRITE, encoding="utf-8")
    (src / "icons.json").write_text(json.dumps(ALIASES), encoding="utf-8")
    return tmp_path
