"""
Raw block shield

Content wrapped in <raw>...</raw> must reach the output byte-for-byte, so it
is lifted out of the document before the tree parser ever sees it and put
back once the rewritten tree has been serialized.

Example:
    >>> shield = RawShield()
    >>> shielded = shield.raws_extract("<h1><raw><%= test %></raw></h1>")
    >>> shielded.text
    '<h1>###RAW0###</h1>'
    >>> shield.raws_reinject(shielded.text, shielded.raws)
    '<h1><%= test %></h1>'
"""

import re
from typing import List

from ..config import appsettings
from ..models.segments import ShieldedText
from .log import LOG


# Tolerates stray whitespace inside the markers: "< raw >", "</ raw >"
RAW_PATTERN = re.compile(r'<\s*raw\s*>(.*?)<\s*/\s*raw\s*>', re.IGNORECASE | re.DOTALL)


class RawShield:
    """
    Extracts and reinjects <raw> blocks

    Placeholders are built by ``appsettings.rawPlaceHolder_make`` and are
    numbered left to right starting at zero.
    """

    def __init__(self, settings=None):
        self.settings = settings or appsettings
        self.placeholder_re = re.compile(
            re.escape(self.settings.raw_placeholder_prefix)
            + r'(\d+)'
            + re.escape(self.settings.raw_placeholder_suffix)
        )

    def raws_extract(self, text: str) -> ShieldedText:
        """
        Replace every raw block with a positional placeholder

        Blocks are matched one at a time from the left until none remain, so
        any number of blocks is supported.

        Args:
            text: Caller document

        Returns:
            ShieldedText with placeholders in ``text`` and captured contents
            in ``raws``
        """
        raws: List[str] = []

        match = RAW_PATTERN.search(text)
        while match:
            placeholder = self.settings.rawPlaceHolder_make(len(raws))
            raws.append(match.group(1))
            text = text[:match.start()] + placeholder + text[match.end():]
            match = RAW_PATTERN.search(text, match.start() + len(placeholder))

        if raws:
            LOG(f"Shielded {len(raws)} raw block(s)", level=2)
        return ShieldedText(text=text, raws=raws)

    def raws_reinject(self, text: str, raws: List[str]) -> str:
        """
        Put captured raw contents back in place of their placeholders

        Substitution is a single pass, so raw content is never rescanned.
        Placeholders with no recorded content are left untouched.

        Args:
            text: Serialized document containing placeholders
            raws: Contents captured by raws_extract()

        Returns:
            Document with raw contents restored
        """
        if not raws:
            return text

        def placeholder_expand(match: re.Match[str]) -> str:
            index = self.settings.rawIndex_extract(match.group(0))
            if index is None or index >= len(raws):
                return match.group(0)
            return raws[index]

        return self.placeholder_re.sub(placeholder_expand, text)
