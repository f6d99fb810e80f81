"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the conversion pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the conversion progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, pattern, columnCount, config, outputSubdir
        - env_check: htmlOutputdir, configFile, envOK
        - options_load: inkyOptions
        - documents_convert: convertResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing source documents
        outputdir: Base output directory for converted files
        verbosity: Logging verbosity level (1-3)
        pattern: Glob (relative to inputdir) selecting documents to convert
        columnCount: Optional grid width override from the command line
        config: Optional YAML options file (relative to inputdir or absolute)
        outputSubdir: Subdirectory within outputdir for output
        envOK: Environment validation passed
        htmlOutputdir: Final output directory (outputdir + outputSubdir)
        configFile: Resolved path to the options file, if any
        inkyOptions: Engine options assembled from config file and CLI
        convertResult: Conversion results (status, files, count)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    pattern: str = field(default="**/*.html")
    columnCount: Optional[int] = field(default=None)
    config: Optional[str] = field(default=None)
    outputSubdir: str = field(default=".")

    # Pipeline state
    envOK: bool = field(default=False)
    htmlOutputdir: Path = field(default=Path("/"))
    configFile: Optional[Path] = field(default=None)
    inkyOptions: Optional[Any] = field(default=None)  # InkyOptions at runtime
    convertResult: Optional[Dict] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Merges CLI options with explicitly provided directories to create
        the initial program state for the conversion pipeline.

        Args:
            options: Parsed CLI arguments (pattern, config, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for conversion output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Only keep options that exist in ProgramState
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        # Explicit directories override anything in the namespace
        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}

        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            options_load,
            documents_convert,
            results_report
        )

    This is equivalent to:
        results_report(documents_convert(options_load(env_check(initial_state))))

    But reads left-to-right instead of inside-out.
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
