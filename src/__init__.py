"""
inky - Email markup converter

Converts semantic layout tags (<container>, <row>, <columns>, <button>, ...)
into the table-based HTML that email clients can render.
"""

from .lib import (
    Inky,
    convert,
    InkyError,
    StructuralViolation,
    MissingRequiredProperty,
    RewriteLimitExceeded,
    OptionsError,
    LOG,
    state_connectToLogger,
    __version__,
)
from .models import ComponentKind, InkyOptions

__all__ = [
    "Inky",
    "InkyOptions",
    "ComponentKind",
    "convert",
    "InkyError",
    "StructuralViolation",
    "MissingRequiredProperty",
    "RewriteLimitExceeded",
    "OptionsError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
