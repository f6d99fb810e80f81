"""
Rewrite driver

Repeatedly picks the first pending component element in document order,
expands it, and splices the result back into the tree until nothing is
pending. Expansions are re-parsed on insertion, so components they contain
(or emit, like the <center> of an expanded button) are picked up on a later
pass; the loop runs to a fixed point rather than over a precomputed list.

A component is pending when its tag name is a configured component tag and
it has not been rewritten in place already. Only <center> is rewritten in
place; those nodes are tracked in an out-of-band set instead of being
tagged in the tree.
"""

from typing import Dict

from bs4.element import Tag

from ..models.components import ComponentKind
from .errors import RewriteLimitExceeded
from .expander import ComponentExpander
from .log import LOG
from .tree import TreeAdapter


class RewriteDriver:
    """
    Drives a ComponentExpander over a loaded tree to a fixed point

    Attributes:
        tree: Adapter holding the loaded document
        expander: Rule set for the engine's options
        kinds: Concrete tag name -> ComponentKind dispatch table
        max_rewrites: Defensive cap on expansions per run
        processed: Elements rewritten in place, keyed by id()
    """

    def __init__(
        self,
        tree: TreeAdapter,
        expander: ComponentExpander,
        kinds: Dict[str, ComponentKind],
        max_rewrites: int,
    ) -> None:
        self.tree = tree
        self.expander = expander
        self.kinds = kinds
        self.max_rewrites = max_rewrites
        self.processed: Dict[int, Tag] = {}

    def node_isPending(self, tag: Tag) -> bool:
        return self.tree.tagName_get(tag) in self.kinds and id(tag) not in self.processed

    def run(self) -> int:
        """
        Rewrite until no pending component remains

        Returns:
            Number of expansions performed

        Raises:
            RewriteLimitExceeded: If max_rewrites expansions did not reach
                                  a fixed point
            StructuralViolation: Propagated from the expander
        """
        rewrites = 0

        node = self.tree.node_findFirst(self.node_isPending)
        while node is not None:
            name = self.tree.tagName_get(node)
            if rewrites >= self.max_rewrites:
                raise RewriteLimitExceeded(self.max_rewrites, name)

            kind = self.kinds[name]
            markup = self.expander.expand(node, kind)
            if markup is None:
                self.processed[id(node)] = node
                LOG(f"Rewrote <{name}> in place", level=3)
            else:
                self.tree.node_replace(node, markup)
                LOG(f"Expanded <{name}> as {kind.value}", level=3)

            rewrites += 1
            node = self.tree.node_findFirst(self.node_isPending)

        LOG(f"Reached fixed point after {rewrites} rewrite(s)", level=2)
        return rewrites
