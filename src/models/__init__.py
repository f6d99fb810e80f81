"""
Models package for inky

Contains data structures and type definitions for the conversion pipeline.
"""

from .state import ProgramState, pipeline
from .components import ComponentKind, DEFAULT_COMPONENTS, IGNORED_ATTRIBUTES, VOID_ELEMENTS
from .options import InkyOptions
from .segments import ShieldedText

__all__ = [
    "ProgramState",
    "pipeline",
    "ComponentKind",
    "DEFAULT_COMPONENTS",
    "IGNORED_ATTRIBUTES",
    "VOID_ELEMENTS",
    "InkyOptions",
    "ShieldedText",
]
