"""
Engine options model

Immutable per-engine configuration: grid width, component tag overrides and
passthrough options for the tree parser.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .components import ComponentKind, DEFAULT_COMPONENTS, kind_fromKey


@dataclass(frozen=True)
class InkyOptions:
    """
    Configuration held by an Inky engine for its whole lifetime

    ``components`` may be partial; it is merged over DEFAULT_COMPONENTS when
    the options are constructed. Numeric values are taken as given.

    Attributes:
        column_count: Grid denominator for column width inference
        components: Logical kind key -> concrete tag name (read-only view)
        parser_options: Passthrough options for the tree adapter (read-only view)

    Example:
        >>> options = InkyOptions(column_count=16, components={"columns": "col"})
        >>> options.components["columns"], options.components["row"]
        ('col', 'row')
    """
    column_count: Optional[int] = None
    components: Mapping[str, str] = field(default_factory=dict)
    parser_options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        from ..config import appsettings

        column_count = self.column_count or appsettings.column_count
        merged = {**DEFAULT_COMPONENTS, **dict(self.components)}
        object.__setattr__(self, "column_count", column_count)
        object.__setattr__(self, "components", MappingProxyType(merged))
        object.__setattr__(self, "parser_options", MappingProxyType(dict(self.parser_options)))

    @classmethod
    def options_fromMapping(cls, mapping: Optional[Mapping[str, Any]]) -> "InkyOptions":
        """
        Build options from a camelCase mapping

        Accepts the keys used by the original tool's option objects:
        ``columnCount``, ``components`` and ``parserOptions`` (``cheerio`` is
        accepted as an alias of ``parserOptions``).

        Args:
            mapping: Option mapping, typically loaded from YAML or JSON

        Returns:
            InkyOptions instance
        """
        mapping = mapping or {}
        parser_options = mapping.get("parserOptions", mapping.get("cheerio")) or {}
        return cls(
            column_count=mapping.get("columnCount"),
            components=mapping.get("components") or {},
            parser_options=parser_options,
        )

    def tag_get(self, kind: ComponentKind) -> str:
        """Concrete tag name configured for a component kind"""
        return self.components[kind.value].lower()

    def kinds_byTag(self) -> Dict[str, ComponentKind]:
        """
        Build the tag name -> ComponentKind dispatch table

        Keys that do not name a known ComponentKind are skipped. Tag names are
        lower-cased because the tree parser lower-cases element names.

        Returns:
            Dict mapping concrete tag names to their component kind
        """
        table: Dict[str, ComponentKind] = {}
        for key, tag in self.components.items():
            kind = kind_fromKey(key)
            if kind is None:
                continue
            table[tag.lower()] = kind
        return table

    def keys_unknown(self) -> list[str]:
        """Component keys that do not name a known component kind"""
        return [key for key in self.components if kind_fromKey(key) is None]
