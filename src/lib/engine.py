"""
Inky conversion engine

Turns a document written with inky's semantic tags (<container>, <row>,
<columns>, <button>, ...) into table markup that email clients render.

Conversion steps:
1. Shield <raw> blocks behind placeholders
2. Give void elements an explicit self-close marker
3. Parse into a tree
4. Rewrite components to a fixed point
5. Serialize and canonicalize the output
6. Reinject raw blocks

Example:
    >>> inky = Inky()
    >>> inky.convert('<container>Hi</container>')
    '<table align="center" class="container"><tbody><tr><td>Hi</td></tr></tbody></table>'
"""

from typing import Any, Dict, Mapping, Optional, Union

from ..config import appsettings
from ..models.components import ComponentKind
from ..models.options import InkyOptions
from .driver import RewriteDriver
from .expander import ComponentExpander
from .log import LOG
from .shield import RawShield
from .tree import TreeAdapter
from .voids import output_canonicalize, voids_normalize


class Inky:
    """
    Converts inky markup to email-safe HTML

    The engine holds only immutable options; every convert() call builds its
    own tree, so one engine can serve any number of calls.
    """

    def __init__(self, options: Union[InkyOptions, Mapping[str, Any], None] = None) -> None:
        """
        Initialize engine

        Args:
            options: InkyOptions, or a camelCase mapping accepted by
                     InkyOptions.options_fromMapping (``columnCount``,
                     ``components``, ``parserOptions``)
        """
        if not isinstance(options, InkyOptions):
            options = InkyOptions.options_fromMapping(options)
        self.options: InkyOptions = options
        self.kinds: Dict[str, ComponentKind] = options.kinds_byTag()
        self.shield = RawShield()

        unknown = options.keys_unknown()
        if unknown:
            LOG(f"Ignoring unknown component keys: {', '.join(unknown)}", level=1)

    @property
    def column_count(self) -> int:
        return self.options.column_count

    @property
    def components(self) -> Mapping[str, str]:
        return self.options.components

    def convert(self, text: str) -> str:
        """
        Convert a document

        Args:
            text: Document containing inky components

        Returns:
            Document with every component expanded to table markup

        Raises:
            StructuralViolation: If a selected node cannot be expanded
            RewriteLimitExceeded: If the rewrite loop does not settle
        """
        shielded = self.shield.raws_extract(text)
        html = voids_normalize(shielded.text)

        tree = TreeAdapter(self.options.parser_options)
        tree.document_load(html)

        expander = ComponentExpander(self.options, tree)
        driver = RewriteDriver(tree, expander, self.kinds, appsettings.max_rewrites)
        rewrites = driver.run()
        LOG(f"Converted document: {len(text)} characters, {rewrites} rewrite(s)", level=2)

        html = output_canonicalize(tree.document_serialize())
        return self.shield.raws_reinject(html, shielded.raws)

    # Historical name of convert()
    releaseTheKraken = convert


def convert(text: str, options: Optional[Mapping[str, Any]] = None) -> str:
    """Convert a document with a one-off engine"""
    return Inky(options).convert(text)
