"""
Exceptions raised by the conversion engine

Every fatal condition aborts the whole conversion; nothing is returned
partially and nothing is retried.
"""


class InkyError(Exception):
    """Base class for all inky errors"""
    pass


class StructuralViolation(InkyError):
    """
    Raised when a node selected for expansion is not an element

    Covers text, comment, CDATA and document nodes, as well as elements
    without a tag name.
    """
    pass


class MissingRequiredProperty(StructuralViolation):
    """Raised when an expansion rule needs a property that cannot be defaulted"""
    pass


class RewriteLimitExceeded(InkyError):
    """Raised when the rewrite driver hits its iteration cap"""

    def __init__(self, limit: int, tag: str):
        self.limit = limit
        self.tag = tag
        super().__init__(
            f"Gave up after {limit} component rewrites; "
            f"<{tag}> is still pending. A component is re-emitting its own tag."
        )


class OptionsError(InkyError):
    """Raised when an options file cannot be read or is not a mapping"""
    pass
