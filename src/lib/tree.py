"""
Tree adapter over BeautifulSoup

The conversion engine never touches the parser directly; everything it needs
from a mutable markup tree goes through TreeAdapter:

- load text into a tree, serialize it back
- find nodes by tag name (or predicate) in document order
- read/write attributes and classes
- read inner markup, replace a node with new (re-parsed) markup
- walk children, siblings and descendants

Entity handling:
    When ``decode_entities`` is False (the default), every "&" is swapped for
    a private-use placeholder before parsing and swapped back after
    serialization, so "&nbsp;" and friends come out exactly as they went in.
    Serialization then does no entity substitution at all.

Name case:
    html.parser lower-cases tag and attribute names. Mixed-case names seen in
    the source (``viewBox``, ``foreignObject``) are recorded on load and put
    back on serialization.
"""

import re
from typing import Any, Callable, Dict, List, Mapping, Optional

from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.element import Doctype, PageElement, Tag
from bs4.formatter import HTMLFormatter

from ..config import appsettings


START_TAG_RE = re.compile(r'''<\s*([a-zA-Z][\w:.-]*)((?:"[^"]*"|'[^']*'|[^'">])*)>''')
END_TAG_RE = re.compile(r'<\s*/\s*([a-zA-Z][\w:.-]*)')
QUOTED_RE = re.compile(r'"[^"]*"|\'[^\']*\'')
ATTR_NAME_RE = re.compile(r'(?:^|\s)([a-zA-Z_:][\w:.-]*)')


class SourceOrderFormatter(HTMLFormatter):
    """HTML formatter that keeps attributes in the order they were written"""

    def attributes(self, tag: Tag):
        if tag.attrs is None:
            return []
        return list(tag.attrs.items())


class InlineDoctype(Doctype):
    """Doctype serialized without the trailing newline bs4 normally adds"""

    SUFFIX = ">"


def name_isMixedCase(name: str) -> bool:
    return name != name.lower() and name != name.upper()


def names_scan(text: str) -> Dict[str, Dict[str, str]]:
    """
    Collect mixed-case tag and attribute names from raw markup

    Returns:
        ``{"tags": {...}, "attrs": {...}}``, each mapping the lower-cased
        name to the first spelling seen in the text

    Example:
        >>> names_scan('<svg viewBox="0 0 1 1"><foreignObject/></svg>')
        {'tags': {'foreignobject': 'foreignObject'}, 'attrs': {'viewbox': 'viewBox'}}
    """
    tags: Dict[str, str] = {}
    attrs: Dict[str, str] = {}

    for match in START_TAG_RE.finditer(text):
        name = match.group(1)
        if name_isMixedCase(name):
            tags.setdefault(name.lower(), name)
        for attr in ATTR_NAME_RE.findall(QUOTED_RE.sub(" ", match.group(2))):
            if name_isMixedCase(attr):
                attrs.setdefault(attr.lower(), attr)

    for name in END_TAG_RE.findall(text):
        if name_isMixedCase(name):
            tags.setdefault(name.lower(), name)

    return {"tags": tags, "attrs": attrs}


class TreeAdapter:
    """
    Narrow interface between the rewrite engine and BeautifulSoup

    Recognised ``parser_options`` keys:
        decode_entities: Let the parser decode entities (default False)
        formatter: Output formatter (default a SourceOrderFormatter, with
                   minimal entity substitution when entities are decoded)
        features: Tree builder (default ``appsettings.parser_features``)

    Every other key is forwarded to the BeautifulSoup constructor as is.
    ``multi_valued_attributes`` defaults to None so ``class`` stays a string.
    """

    def __init__(self, parser_options: Optional[Mapping[str, Any]] = None, settings=None):
        self.settings = settings or appsettings
        options = dict(parser_options or {})

        self.decode_entities: bool = bool(options.pop("decode_entities", False))
        self.formatter = options.pop("formatter", None) or SourceOrderFormatter(
            entity_substitution=EntitySubstitution.substitute_xml if self.decode_entities else None
        )
        self.features: str = options.pop("features", self.settings.parser_features)
        options.setdefault("multi_valued_attributes", None)
        self.soup_kwargs: Dict[str, Any] = options

        self.soup: Optional[BeautifulSoup] = None
        self.tag_names: Dict[str, str] = {}
        self.attr_names: Dict[str, str] = {}

    # ------------------------------------------------------------------
    # Text <-> tree
    # ------------------------------------------------------------------

    def entities_protect(self, text: str) -> str:
        """Swap "&" for the entity placeholder (no-op when decoding entities)"""
        if self.decode_entities:
            return text
        return text.replace("&", self.settings.entity_placeholder)

    def entities_restore(self, text: str) -> str:
        """Undo entities_protect()"""
        if self.decode_entities:
            return text
        return text.replace(self.settings.entity_placeholder, "&")

    def markup_parse(self, markup: str) -> BeautifulSoup:
        """Parse markup into a standalone tree using the configured builder"""
        return BeautifulSoup(self.entities_protect(markup), self.features, **self.soup_kwargs)

    def document_load(self, text: str) -> BeautifulSoup:
        """Parse the working document; all later queries run against it"""
        names = names_scan(text)
        self.tag_names = names["tags"]
        self.attr_names = names["attrs"]

        self.soup = self.markup_parse(text)
        for child in list(self.soup.contents):
            if isinstance(child, Doctype) and not isinstance(child, InlineDoctype):
                child.replace_with(InlineDoctype(child))
        return self.soup

    def names_restore(self) -> None:
        """Put recorded mixed-case tag and attribute names back on the tree"""
        if not (self.tag_names or self.attr_names):
            return
        for tag in self.soup.find_all(True):
            if tag.name in self.tag_names:
                tag.name = self.tag_names[tag.name]
            if tag.attrs and any(name in self.attr_names for name in tag.attrs):
                tag.attrs = {self.attr_names.get(name, name): value for name, value in tag.attrs.items()}

    def document_serialize(self) -> str:
        """Serialize the working document back to text"""
        self.names_restore()
        return self.entities_restore(self.soup.decode(formatter=self.formatter))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def node_findFirst(self, predicate: Callable[[Tag], bool]) -> Optional[Tag]:
        """First element in document order satisfying predicate"""
        return self.soup.find(predicate)

    def nodes_select(self, selector: str) -> List[Tag]:
        """
        Elements matching a tag name or comma-joined list of tag names

        Example:
            >>> tree.nodes_select("row, columns")
        """
        names = [name.strip().lower() for name in selector.split(",") if name.strip()]
        return self.soup.find_all(names)

    def node_isElement(self, node: Any) -> bool:
        """True for element nodes; False for text, comments and the document"""
        return isinstance(node, Tag) and not isinstance(node, BeautifulSoup)

    def tagName_get(self, node: Tag) -> str:
        return node.name or ""

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def attrs_get(self, node: Tag) -> Dict[str, str]:
        """Full attribute mapping, in source order"""
        return dict(node.attrs)

    def attr_get(self, node: Tag, name: str) -> Optional[str]:
        return node.get(name)

    def attr_set(self, node: Tag, name: str, value: str) -> None:
        node[name] = value

    def classes_get(self, node: Tag) -> List[str]:
        """Whitespace-split class attribute"""
        value = node.get("class") or ""
        if isinstance(value, list):
            return list(value)
        return value.split()

    def class_has(self, node: Tag, name: str) -> bool:
        return name in self.classes_get(node)

    def class_add(self, node: Tag, name: str) -> None:
        """Append a class unless already present"""
        classes = self.classes_get(node)
        if name in classes:
            return
        classes.append(name)
        node["class"] = " ".join(classes)

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def inner_get(self, node: Tag) -> str:
        """Inner markup of an element"""
        return node.decode_contents(formatter=self.formatter)

    def children_get(self, node: Tag) -> List[Tag]:
        """Direct element children (text nodes skipped)"""
        return node.find_all(True, recursive=False)

    def siblings_before(self, node: Tag, predicate: Callable[[Tag], bool]) -> List[Tag]:
        return node.find_previous_siblings(predicate)

    def siblings_after(self, node: Tag, predicate: Callable[[Tag], bool]) -> List[Tag]:
        return node.find_next_siblings(predicate)

    def siblings_get(self, node: Tag, predicate: Callable[[Tag], bool]) -> List[Tag]:
        """Element siblings (not including node) satisfying predicate"""
        return self.siblings_before(node, predicate)[::-1] + self.siblings_after(node, predicate)

    def descendants_find(self, node: Tag, predicate: Callable[[Tag], bool]) -> List[Tag]:
        return node.find_all(predicate)

    def node_replace(self, node: Tag, markup: str) -> List[PageElement]:
        """
        Replace an element with freshly parsed markup

        The markup is parsed with the same builder and entity handling as the
        document, so custom tags inside it are visible to later queries.

        Returns:
            The top-level nodes that took the element's place
        """
        fragment = self.markup_parse(markup)
        new_nodes = list(fragment.contents)
        if new_nodes:
            node.replace_with(*new_nodes)
        else:
            node.decompose()
        return new_nodes
