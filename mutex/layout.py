"""
Rebuilds reading-order text from positioned PDF text fragments.

Coordinates follow PDF space: origin at the bottom-left, so a larger ``y``
sits higher on the page.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List


@dataclass(frozen=True)
class PositionedFragment:
    text: str
    x: int
    y: int


def reconstruct_page_lines(fragments: Iterable[PositionedFragment]) -> List[str]:
    """
    Group one page's fragments into visual lines.

    Fragments sharing the same rounded baseline ``y`` form a line. Lines come
    out top of page first, fragments inside a line left to right, joined by a
    single space. Blank fragments are dropped before grouping.
    """
    lines: Dict[int, List[PositionedFragment]] = {}
    for fragment in fragments:
        if not fragment.text.strip():
            continue
        lines.setdefault(fragment.y, []).append(fragment)

    return [
        " ".join(f.text for f in sorted(lines[y], key=lambda f: f.x))
        for y in sorted(lines, reverse=True)
    ]


def assemble_document(pages: Iterable[List[str]]) -> str:
    """Join per-page lines into one document, each page ending with a line break."""
    text_output = ""
    for page_lines in pages:
        text_output += "\n".join(page_lines) + "\n"
    return text_output
