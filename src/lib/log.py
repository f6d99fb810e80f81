"""
Centralized logging using Loguru with context-aware verbosity.

The conversion engine is a library first: it never decides on its own how
chatty to be. LOG() only emits when a ProgramState (or any object carrying
a ``verbosity`` attribute) has been connected to the current context, which
the command line does at the start of its pipeline.

Usage:
    from inky.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)

    LOG("Converting 3 documents", level=1)
    LOG("Rewrote <columns> (pending: 4)", level=2)
    LOG("Raw block 0: 12 characters", level=3)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# Context variable to hold current ProgramState
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module: <10}</cyan>:"
    "<cyan>{function: <20}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()  # Remove default handler
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Args:
        state: Object with a ``verbosity`` attribute (ProgramState in the CLI)
    """
    _program_state.set(state)


def state_disconnectFromLogger() -> None:
    """Detach whatever state is connected; LOG() becomes silent again."""
    _program_state.set(None)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=trace)
        **kwargs: Additional loguru metadata
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        logger.opt(depth=1).debug(message, **kwargs)
