"""
Raw segment data models

Type-safe structures for the raw block shield.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class ShieldedText:
    """
    Result of extracting <raw> blocks from a document

    Returned by RawShield.raws_extract(). The text has every raw block
    (markers included) replaced by a positional placeholder; ``raws`` holds
    the captured inner content, indexed to match the placeholders.

    Attributes:
        text: Document text with raw blocks replaced by placeholders
              (e.g., "<h1>###RAW0###</h1>")
        raws: Captured raw contents (###RAW0### -> raws[0], ...)

    Example:
        Input: "<h1><raw><%= test %></raw></h1>"
        Result: ShieldedText(
            text="<h1>###RAW0###</h1>",
            raws=["<%= test %>"]
        )
    """
    text: str
    raws: List[str] = field(default_factory=list)
