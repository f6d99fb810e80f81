"""
inky - Email markup converter

Converts semantic layout tags into table-based HTML for email clients.
"""

__version__ = "1.0.0"

from .engine import Inky, convert
from .errors import (
    InkyError,
    StructuralViolation,
    MissingRequiredProperty,
    RewriteLimitExceeded,
    OptionsError,
)
from .log import LOG, state_connectToLogger, state_disconnectFromLogger

__all__ = [
    "Inky",
    "convert",
    "InkyError",
    "StructuralViolation",
    "MissingRequiredProperty",
    "RewriteLimitExceeded",
    "OptionsError",
    "LOG",
    "state_connectToLogger",
    "state_disconnectFromLogger",
    "__version__",
]
