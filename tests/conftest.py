"""
Shared fixtures

compare() runs markup through a default engine and checks it against the
expected output, ignoring whitespace between tags.
"""

import re

import pytest

from inky import Inky
from inky.lib.log import state_disconnectFromLogger


def html_normalize(html: str) -> str:
    """Collapse whitespace between tags and runs of whitespace"""
    html = re.sub(r">\s+<", "><", html.strip())
    return re.sub(r"\s+", " ", html)


@pytest.fixture
def inky():
    return Inky()


@pytest.fixture
def compare(inky):
    def _compare(source: str, expected: str) -> None:
        assert html_normalize(inky.convert(source)) == html_normalize(expected)

    return _compare


@pytest.fixture(autouse=True)
def logger_reset():
    yield
    state_disconnectFromLogger()
