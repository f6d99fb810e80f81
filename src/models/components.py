"""
Component kinds and tag-level constants

Defines the closed set of inky components, their default tag names, and the
attribute/element tables shared by the expander and the text normalizers.
"""

from enum import Enum
from typing import Dict, FrozenSet, Tuple


class ComponentKind(Enum):
    """
    Logical inky components

    The value is the key used in the ``components`` option mapping; the
    concrete tag name for each kind is configurable per engine.
    """
    BUTTON = "button"
    ROW = "row"
    COLUMNS = "columns"
    CONTAINER = "container"
    CALLOUT = "callout"
    INKY = "inky"               # root marker
    BLOCK_GRID = "blockGrid"
    MENU = "menu"
    MENU_ITEM = "menuItem"
    CENTER = "center"
    SPACER = "spacer"
    WRAPPER = "wrapper"
    H_LINE = "hLine"


# Default concrete tag name for every component kind
DEFAULT_COMPONENTS: Dict[str, str] = {
    ComponentKind.BUTTON.value: "button",
    ComponentKind.ROW.value: "row",
    ComponentKind.COLUMNS.value: "columns",
    ComponentKind.CONTAINER.value: "container",
    ComponentKind.CALLOUT.value: "callout",
    ComponentKind.INKY.value: "inky",
    ComponentKind.BLOCK_GRID.value: "block-grid",
    ComponentKind.MENU.value: "menu",
    ComponentKind.MENU_ITEM.value: "item",
    ComponentKind.CENTER.value: "center",
    ComponentKind.SPACER.value: "spacer",
    ComponentKind.WRAPPER.value: "wrapper",
    ComponentKind.H_LINE.value: "h-line",
}


# Attributes consumed by expansion logic, never carried onto generated tables
IGNORED_ATTRIBUTES: Tuple[str, ...] = (
    "class",
    "id",
    "href",
    "size",
    "size-sm",
    "size-lg",
    "large",
    "no-expander",
    "small",
    "target",
)


# HTML elements that cannot have children
VOID_ELEMENTS: FrozenSet[str] = frozenset({
    "area",
    "base",
    "br",
    "col",
    "embed",
    "hr",
    "img",
    "input",
    "link",
    "meta",
    "param",
    "source",
    "track",
    "wbr",
})


def kind_fromKey(key: str) -> ComponentKind | None:
    """Map an option key (e.g. "blockGrid") to its ComponentKind, if any"""
    try:
        return ComponentKind(key)
    except ValueError:
        return None
