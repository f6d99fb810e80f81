"""
Component expansion rules

Each inky component kind has one handler that turns an element (its
attributes plus already-present inner markup) into email-safe table markup.
The handler table is keyed by ComponentKind, built once per engine; the
rewrite driver decides which kind a node is before calling in.

Shared conventions:
    - classes start with the kind's base class, followed by the element's
      own ``class`` attribute
    - attributes outside IGNORED_ATTRIBUTES are carried onto the generated
      root table (or cell) as name="value" pairs
"""

from typing import Callable, Dict, List, Optional

from bs4.element import Tag

from ..models.components import ComponentKind, IGNORED_ATTRIBUTES
from ..models.options import InkyOptions
from .errors import StructuralViolation
from .log import LOG
from .tree import TreeAdapter


INKY_MARKER = (
    '<tr><td><img src="https://raw.githubusercontent.com/arvida/emoji-cheat-sheet.com/'
    'master/public/graphics/emojis/octopus.png" /></tr></td>'
)


class ComponentExpander:
    """
    Maps (element, carried attributes, inner markup) to replacement markup

    expand() returns the markup that should take the element's place, or
    None when the element was rewritten in place (the centering wrapper)
    and must simply be left in the tree.
    """

    def __init__(self, options: InkyOptions, tree: TreeAdapter) -> None:
        self.options = options
        self.tree = tree
        self.column_count = options.column_count
        self.columns_tag = options.tag_get(ComponentKind.COLUMNS)
        self.row_tag = options.tag_get(ComponentKind.ROW)
        self.menu_item_tag = options.tag_get(ComponentKind.MENU_ITEM)

        self.handlers: Dict[ComponentKind, Callable[[Tag], Optional[str]]] = {
            ComponentKind.H_LINE: self.hLine_expand,
            ComponentKind.COLUMNS: self.columns_expand,
            ComponentKind.ROW: self.row_expand,
            ComponentKind.BUTTON: self.button_expand,
            ComponentKind.CONTAINER: self.container_expand,
            ComponentKind.INKY: self.inky_expand,
            ComponentKind.BLOCK_GRID: self.blockGrid_expand,
            ComponentKind.MENU: self.menu_expand,
            ComponentKind.MENU_ITEM: self.menuItem_expand,
            ComponentKind.CENTER: self.center_expand,
            ComponentKind.CALLOUT: self.callout_expand,
            ComponentKind.SPACER: self.spacer_expand,
            ComponentKind.WRAPPER: self.wrapper_expand,
        }

    def expand(self, node: Tag, kind: Optional[ComponentKind]) -> Optional[str]:
        """
        Produce replacement markup for one component element

        Args:
            node: Element selected by the rewrite driver
            kind: Its component kind, or None if the tag maps to no kind

        Returns:
            Replacement markup, or None if the node was rewritten in place

        Raises:
            StructuralViolation: If node is not an element or has no tag name
        """
        self.node_validate(node)

        handler = self.handlers.get(kind) if kind is not None else None
        if handler is None:
            LOG(f"No rule for <{self.tree.tagName_get(node)}>, wrapping in a row", level=2)
            return self.unknown_expand(node)
        return handler(node)

    def node_validate(self, node: object) -> None:
        """Reject anything that is not a named element"""
        if not self.tree.node_isElement(node):
            raise StructuralViolation(
                f"Expected an element, got {type(node).__name__}"
            )
        if not self.tree.tagName_get(node):
            raise StructuralViolation("Element must have a tag name")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def attrs_render(self, node: Tag) -> str:
        """
        Render the carried attributes of node

        Returns:
            ' name="value"' pairs (each with a leading space), or "" if none
        """
        result = ""
        for key, value in self.tree.attrs_get(node).items():
            if key in IGNORED_ATTRIBUTES:
                continue
            value = (value or "").replace('"', "&quot;")
            result += f' {key}="{value}"'
        return result

    def classes_build(self, node: Tag, *base: str) -> str:
        """Base classes followed by the element's own classes"""
        classes: List[str] = list(base)
        classes.extend(self.tree.classes_get(node))
        return " ".join(classes)

    def target_render(self, node: Tag) -> str:
        target = self.tree.attr_get(node, "target")
        if not target:
            return ""
        return f' target="{target}"'

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def hLine_expand(self, node: Tag) -> str:
        classes = self.classes_build(node, "h-line")
        return f'<table class="{classes}"><tr><th>&nbsp;</th></tr></table>'

    def row_expand(self, node: Tag) -> str:
        attrs = self.attrs_render(node)
        classes = self.classes_build(node, "row")
        inner = self.tree.inner_get(node)
        return f'<table{attrs} class="{classes}"><tbody><tr>{inner}</tr></tbody></table>'

    def button_expand(self, node: Tag) -> str:
        """
        <button> - nested table; anchor if href, centered + expander if expanded
        """
        inner = self.tree.inner_get(node)
        expander = ""

        href = self.tree.attr_get(node, "href")
        if href:
            attrs = self.attrs_render(node)
            inner = f'<a{attrs} href="{href}"{self.target_render(node)}>{inner}</a>'

        if self.tree.class_has(node, "expand") or self.tree.class_has(node, "expanded"):
            inner = f"<center>{inner}</center>"
            expander = '\n<td class="expander"></td>'

        classes = self.classes_build(node, "button")
        return (
            f'<table class="{classes}"><tbody><tr><td>'
            f'<table><tbody><tr><td>{inner}</td></tr></tbody></table>'
            f'</td>{expander}</tr></tbody></table>'
        )

    def container_expand(self, node: Tag) -> str:
        attrs = self.attrs_render(node)
        classes = self.classes_build(node, "container")
        inner = self.tree.inner_get(node)
        return (
            f'<table{attrs} align="center" class="{classes}">'
            f'<tbody><tr><td>{inner}</td></tr></tbody></table>'
        )

    def inky_expand(self, node: Tag) -> str:
        return INKY_MARKER

    def blockGrid_expand(self, node: Tag) -> str:
        up = self.tree.attr_get(node, "up")
        base = ["block-grid"]
        if up:
            base.append(f"up-{up}")
        classes = self.classes_build(node, *base)
        inner = self.tree.inner_get(node)
        return f'<table class="{classes}"><tbody><tr>{inner}</tr></tbody></table>'

    def menu_expand(self, node: Tag) -> str:
        attrs = self.attrs_render(node)
        classes = self.classes_build(node, "menu")
        inner = self.tree.inner_get(node)
        return (
            f'<table{attrs} class="{classes}"><tbody><tr><td>'
            f'<table><tbody><tr>{inner}</tr></tbody></table>'
            f'</td></tr></tbody></table>'
        )

    def menuItem_expand(self, node: Tag) -> str:
        attrs = self.attrs_render(node)
        classes = self.classes_build(node, "menu-item")
        href = self.tree.attr_get(node, "href") or ""
        inner = self.tree.inner_get(node)
        return (
            f'<th{attrs} class="{classes}">'
            f'<a href="{href}"{self.target_render(node)}>{inner}</a></th>'
        )

    def center_expand(self, node: Tag) -> None:
        """
        <center> - centers its children in place

        Every direct child gets align="center" and the float-center class, as
        does every menu item below it. The <center> itself stays in the tree.
        """
        children = self.tree.children_get(node)
        if children:
            for child in children:
                self.tree.attr_set(child, "align", "center")
                self.tree.class_add(child, "float-center")

            items = self.tree.descendants_find(
                node,
                lambda tag: tag.name == self.menu_item_tag or self.tree.class_has(tag, "menu-item"),
            )
            for item in items:
                self.tree.class_add(item, "float-center")

        return None

    def callout_expand(self, node: Tag) -> str:
        attrs = self.attrs_render(node)
        classes = self.classes_build(node, "callout-inner")
        inner = self.tree.inner_get(node)
        return (
            f'<table{attrs} class="callout"><tbody><tr>'
            f'<th class="{classes}">{inner}</th><th class="expander"></th>'
            f'</tr></tbody></table>'
        )

    def spacer_expand(self, node: Tag) -> str:
        """
        <spacer> - fixed-height table(s)

        ``size`` gives one spacer (default 16). ``size-sm`` and ``size-lg``
        give responsive spacers hidden/shown at the large breakpoint; either
        or both may be present, and both receive the full class list.
        """
        attrs = self.attrs_render(node)
        classes = self.classes_build(node, "spacer")
        size_sm = self.tree.attr_get(node, "size-sm")
        size_lg = self.tree.attr_get(node, "size-lg")

        if size_sm or size_lg:
            html = ""
            if size_sm:
                html += self.spacerTable_make(attrs, f"{classes} hide-for-large", size_sm)
            if size_lg:
                html += self.spacerTable_make(attrs, f"{classes} show-for-large", size_lg)
            return html

        size = self.tree.attr_get(node, "size") or 16
        return self.spacerTable_make(attrs, classes, size)

    def spacerTable_make(self, attrs: str, classes: str, size) -> str:
        return (
            f'<table{attrs} class="{classes}"><tbody><tr>'
            f'<td height="{size}" style="font-size:{size}px;line-height:{size}px;">&nbsp;</td>'
            f'</tr></tbody></table>'
        )

    def wrapper_expand(self, node: Tag) -> str:
        attrs = self.attrs_render(node)
        classes = self.classes_build(node, "wrapper")
        inner = self.tree.inner_get(node)
        return (
            f'<table{attrs} class="{classes}" align="center">'
            f'<tbody><tr><td class="wrapper-inner">{inner}</td></tr></tbody></table>'
        )

    def unknown_expand(self, node: Tag) -> str:
        return f"<tr><td>{self.tree.inner_get(node)}</td></tr>"

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    def column_is(self, tag: Tag) -> bool:
        """An unconverted <columns> element, or a cell it was already turned into"""
        if tag.name == self.columns_tag:
            return True
        return tag.name == "th" and self.tree.class_has(tag, "columns")

    def row_isNested(self, tag: Tag) -> bool:
        return tag.name == self.row_tag or self.tree.class_has(tag, "row")

    def columns_expand(self, node: Tag) -> str:
        """
        <columns> - one grid cell

        Sizes:
            small = ``small`` attribute, else the full grid width
            large = ``large``, else ``small``, else grid width // column count

        The column count is this column plus its column siblings, converted
        or not, so every column in a row sees the same count whatever order
        the rewrites happen in. The same goes for the first/last checks.

        An expander cell is appended when the column spans the whole grid at
        large size, holds no nested row, and ``no-expander`` is absent or
        "false".
        """
        inner = self.tree.inner_get(node)
        attrs = self.attrs_render(node)

        column_total = len(self.tree.siblings_get(node, self.column_is)) + 1

        small = self.tree.attr_get(node, "small")
        large = self.tree.attr_get(node, "large")
        small_size = small or self.column_count
        large_size = large or small or self.column_count // column_total

        classes = self.tree.classes_get(node)
        classes.append(f"small-{small_size}")
        classes.append(f"large-{large_size}")
        classes.append("columns")

        if not self.tree.siblings_before(node, self.column_is):
            classes.append("first")
        if not self.tree.siblings_after(node, self.column_is):
            classes.append("last")

        expander = ""
        no_expander = self.tree.attr_get(node, "no-expander")
        if (
            str(large_size) == str(self.column_count)
            and not self.tree.descendants_find(node, self.row_isNested)
            and (no_expander is None or no_expander == "false")
        ):
            expander = '\n<th class="expander"></th>'

        class_list = " ".join(classes)
        return (
            f'<th class="{class_list}"{attrs}>'
            f'<table><tbody><tr><th>{inner}</th>{expander}</tr></tbody></table></th>'
        )
