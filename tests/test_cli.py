"""
Command line pipeline tests

Runs the pipeline stages directly against temporary directories.
"""

from argparse import Namespace
from pathlib import Path

import pytest

from inky import OptionsError
from inky.__main__ import (
    documents_convert,
    env_check,
    options_load,
    optionsFile_read,
    results_report,
)
from inky.models import ProgramState, pipeline


def state_make(inputdir: Path, outputdir: Path, **kwargs) -> ProgramState:
    options = Namespace(verbosity=0, pattern="**/*.html", columnCount=None, config=None, outputSubdir=".")
    for key, value in kwargs.items():
        setattr(options, key, value)
    return ProgramState.state_createFromNamespace(options=options, inputdir=inputdir, outputdir=outputdir)


@pytest.fixture
def dirs(tmp_path):
    inputdir = tmp_path / "in"
    outputdir = tmp_path / "out"
    inputdir.mkdir()
    return inputdir, outputdir


class TestEnvCheck:
    def test_output_dir_created(self, dirs):
        inputdir, outputdir = dirs
        state = env_check(state_make(inputdir, outputdir, outputSubdir="emails"))

        assert state.envOK is True
        assert state.htmlOutputdir == outputdir / "emails"
        assert state.htmlOutputdir.is_dir()

    def test_missing_input_dir(self, tmp_path):
        with pytest.raises(SystemExit):
            env_check(state_make(tmp_path / "nope", tmp_path / "out"))

    def test_missing_config_file(self, dirs):
        inputdir, outputdir = dirs

        with pytest.raises(SystemExit):
            env_check(state_make(inputdir, outputdir, config="missing.yaml"))

    def test_config_relative_to_input(self, dirs):
        inputdir, outputdir = dirs
        (inputdir / "inky.yaml").write_text("columnCount: 16\n")

        state = env_check(state_make(inputdir, outputdir, config="inky.yaml"))

        assert state.configFile == inputdir / "inky.yaml"


class TestOptionsLoad:
    def test_yaml_options(self, dirs):
        inputdir, outputdir = dirs
        (inputdir / "inky.yaml").write_text("columnCount: 16\ncomponents:\n  columns: column\n")

        state = options_load(env_check(state_make(inputdir, outputdir, config="inky.yaml")))

        assert state.inkyOptions.column_count == 16
        assert state.inkyOptions.components["columns"] == "column"

    def test_cli_column_count_wins(self, dirs):
        inputdir, outputdir = dirs
        (inputdir / "inky.yaml").write_text("columnCount: 16\n")

        state = options_load(env_check(state_make(inputdir, outputdir, config="inky.yaml", columnCount=24)))

        assert state.inkyOptions.column_count == 24

    def test_defaults_without_config(self, dirs):
        state = options_load(env_check(state_make(*dirs)))

        assert state.inkyOptions.column_count == 12

    def test_empty_file(self, tmp_path):
        config = tmp_path / "empty.yaml"
        config.write_text("")

        assert optionsFile_read(config) == {}

    def test_not_a_mapping(self, tmp_path):
        config = tmp_path / "list.yaml"
        config.write_text("- a\n- b\n")

        with pytest.raises(OptionsError):
            optionsFile_read(config)

    def test_invalid_yaml(self, tmp_path):
        config = tmp_path / "bad.yaml"
        config.write_text("columnCount: [1\n")

        with pytest.raises(OptionsError):
            optionsFile_read(config)


class TestConvert:
    def test_documents_converted_and_mirrored(self, dirs):
        inputdir, outputdir = dirs
        (inputdir / "welcome.html").write_text("<container>Hi</container>", encoding="utf-8")
        (inputdir / "nested").mkdir()
        (inputdir / "nested" / "receipt.html").write_text("<row><columns>x</columns></row>", encoding="utf-8")
        (inputdir / "notes.txt").write_text("<row></row>", encoding="utf-8")

        state = pipeline(state_make(inputdir, outputdir), env_check, options_load, documents_convert, results_report)

        assert state.convertResult["document_count"] == 2
        welcome = (outputdir / "welcome.html").read_text(encoding="utf-8")
        assert welcome == '<table align="center" class="container"><tbody><tr><td>Hi</td></tr></tbody></table>'
        receipt = (outputdir / "nested" / "receipt.html").read_text(encoding="utf-8")
        assert "small-12 large-12 columns first last" in receipt
        assert not (outputdir / "notes.txt").exists()

    def test_custom_pattern(self, dirs):
        inputdir, outputdir = dirs
        (inputdir / "a.inky").write_text("<row></row>", encoding="utf-8")
        (inputdir / "b.html").write_text("<row></row>", encoding="utf-8")

        state = pipeline(state_make(inputdir, outputdir, pattern="*.inky"), env_check, options_load, documents_convert)

        assert state.convertResult["files"] == [str(outputdir / "a.inky")]

    def test_report_requires_result(self, dirs):
        with pytest.raises(SystemExit):
            results_report(state_make(*dirs))
