"""
Void element normalization and output canonicalization

Pure text transforms that run on either side of the tree parser:

- voids_normalize(): before parsing, gives every void element (<img>, <br>,
  <hr>, ...) an explicit self-close marker so a parser that is not void-aware
  cannot nest following content inside it.
- output_canonicalize(): after serialization, collapses paired void elements
  back to the self-closing form, re-applies the normalization, and expands
  self-closed ordinary elements (<td/>) into open/close pairs.

Example:
    >>> voids_normalize('<img src="x" class="thumbnail">')
    '<img src="x" class="thumbnail" />'
    >>> output_canonicalize('<td/><br/><img src="x"></img>')
    '<td></td><br/><img src="x" />'
"""

import re

from ..models.components import VOID_ELEMENTS


_VOID_ALTERNATION = "|".join(sorted(VOID_ELEMENTS))

# <img ...> not immediately followed by </img>
VOID_OPEN_RE = re.compile(
    rf'<({_VOID_ALTERNATION})(\s[^>]*?)?>(?!\s*</\1)',
    re.IGNORECASE,
)

# <img ...></img>, with optional whitespace between the tags
VOID_PAIRED_RE = re.compile(
    rf'<({_VOID_ALTERNATION})(\s[^>]*?)?\s*>\s*</\1\s*>',
    re.IGNORECASE,
)

# Any self-closed element: <td/>, <th class="x" />
SELF_CLOSED_RE = re.compile(r'<([a-zA-Z][a-zA-Z0-9-]*)((?:\s+[^>]*?)?)\s*/>')


def _voidOpen_close(match: re.Match[str]) -> str:
    tag, attrs = match.group(1), match.group(2) or ""
    if attrs.rstrip().endswith("/"):
        return match.group(0)
    return f"<{tag}{attrs} />"


def _voidPaired_collapse(match: re.Match[str]) -> str:
    tag = match.group(1)
    attrs = (match.group(2) or "").rstrip().rstrip("/").rstrip()
    return f"<{tag}{attrs} />"


def _selfClosed_expand(match: re.Match[str]) -> str:
    tag, attrs = match.group(1), match.group(2) or ""
    if tag.lower() in VOID_ELEMENTS:
        return match.group(0)
    return f"<{tag}{attrs}></{tag}>"


def voids_normalize(html: str) -> str:
    """
    Give void elements an explicit self-close marker

    Elements already ending in "/" are left alone, so the transform is
    idempotent.

    Args:
        html: Markup about to be handed to the tree parser

    Returns:
        Markup with every open void element written as <tag ... />
    """
    return VOID_OPEN_RE.sub(_voidOpen_close, html)


def output_canonicalize(html: str) -> str:
    """
    Convert serializer output into the shape callers expect

    Steps, in order:
        1. <img ...></img> -> <img ... />
        2. <img ...>       -> <img ... />   (same as voids_normalize)
        3. <td .../>       -> <td ...></td> for every non-void element

    Args:
        html: Serialized document

    Returns:
        Canonical markup
    """
    html = VOID_PAIRED_RE.sub(_voidPaired_collapse, html)
    html = voids_normalize(html)
    return SELF_CLOSED_RE.sub(_selfClosed_expand, html)
