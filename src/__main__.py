#!/usr/bin/env python3
"""
inky - Email markup converter

Converts documents written with inky's semantic layout tags into the
table-based HTML that email clients render.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Usage:
    inky inputdir/ outputdir/ [--pattern GLOB] [--config options.yaml]

    Every file under inputdir/ matching the pattern is converted and written
    to the same relative path under outputdir/.

Examples:
    # Convert every .html file
    inky templates/ build/

    # 16-column grid, custom tag names from a YAML options file
    inky templates/ build/ --columnCount 16 --config inky.yaml

    # Verbose output
    inky templates/ build/ -vv

Options file (YAML):
    columnCount: 16
    components:
      columns: col
    parserOptions:
      decode_entities: false
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

import yaml
from chris_plugin import chris_plugin

from .lib import Inky, InkyError, OptionsError, __version__, LOG, state_connectToLogger
from .models import InkyOptions, ProgramState, pipeline


parser = ArgumentParser(
    description="inky - convert semantic email markup to table-based HTML",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--pattern",
    default="**/*.html",
    type=str,
    help="Glob (relative to inputdir) selecting the documents to convert",
)

parser.add_argument(
    "--columnCount",
    default=None,
    type=int,
    help="Grid width used for column sizing (overrides the options file)",
)

parser.add_argument(
    "--config",
    default=None,
    type=str,
    help="YAML options file (columnCount, components, parserOptions)",
)

parser.add_argument(
    "--outputSubdir",
    default=".",
    type=str,
    help="Subdirectory within outputdir for the converted documents",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - htmlOutputdir: Created output directory path
            - configFile: Resolved options file, if one was given
            - envOK: True if environment is valid

    Exits:
        1 if inputdir or the options file does not exist
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    if not state.inputdir or not state.inputdir.is_dir():
        print(f"Error: Input directory not found: {state.inputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    if state.config:
        config_file = Path(state.config)
        if not config_file.is_absolute():
            config_file = state.inputdir / config_file
        if not config_file.exists():
            print(f"Error: Options file not found: {config_file}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        state.configFile = config_file
        LOG(f"Options file: {config_file}", level=2)

    state.htmlOutputdir = state.outputdir / state.outputSubdir
    state.htmlOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.htmlOutputdir}", level=2)

    state.envOK = True
    return state


def optionsFile_read(config_file: Path) -> dict:
    """
    Read a YAML options file

    Raises:
        OptionsError: If the file is not valid YAML or not a mapping
    """
    try:
        data = yaml.safe_load(config_file.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise OptionsError(f"Cannot parse options file {config_file}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise OptionsError(f"Options file {config_file} must contain a mapping")
    return data


def options_load(inputstate: ProgramState) -> ProgramState:
    """
    Assemble engine options from the options file and CLI flags.

    Returns:
        ProgramState with added field:
            - inkyOptions: InkyOptions for the conversion engine

    Exits:
        1 if the options file cannot be read
    """
    state = inputstate.copy()

    mapping: dict = {}
    if state.configFile:
        try:
            mapping = optionsFile_read(state.configFile)
        except OptionsError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

    if state.columnCount:
        mapping["columnCount"] = state.columnCount

    state.inkyOptions = InkyOptions.options_fromMapping(mapping)
    LOG(f"Grid width: {state.inkyOptions.column_count}", level=2)
    return state


def documents_convert(inputstate: ProgramState) -> ProgramState:
    """
    Convert every document matching the pattern.

    Output files mirror their path relative to inputdir.

    Returns:
        ProgramState with added field:
            - convertResult: Dict containing:
                - status: bool
                - files: list of written output paths
                - document_count: int

    Exits:
        1 if any document fails to convert
    """
    state = inputstate.copy()

    inky = Inky(state.inkyOptions)
    written = []

    sources = sorted(p for p in state.inputdir.glob(state.pattern) if p.is_file())
    LOG(f"Converting {len(sources)} document(s)...", level=1)

    for source in sources:
        relative = source.relative_to(state.inputdir)
        target = state.htmlOutputdir / relative
        try:
            html = inky.convert(source.read_text(encoding="utf-8"))
        except InkyError as e:
            print(f"Conversion error in {relative}: {e}", file=sys.stderr)
            sys.exit(1)

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(html, encoding="utf-8")
        written.append(str(target))
        LOG(f"Wrote {target}", level=2)

    state.convertResult = {
        "status": True,
        "files": written,
        "document_count": len(written),
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display conversion results.

    Exits:
        1 if convertResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.convertResult:
        print("Error: Conversion failed", file=sys.stderr)
        sys.exit(1)

    LOG("✓ Conversion successful!", level=1)
    LOG(f"  Documents: {state.convertResult['document_count']}", level=1)
    LOG(f"  Output:    {state.htmlOutputdir}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="inky - Email markup converter",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - convert inky documents from inputdir to outputdir.

    Pipeline:
        1. env_check: Validate paths and create the output directory
        2. options_load: Build engine options from YAML and CLI flags
        3. documents_convert: Convert every matching document
        4. results_report: Display results
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, options_load, documents_convert, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
