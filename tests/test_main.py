# tests/test_main.py
"""
Tests for the ``python -m rterror`` demo CLI.
"""

import json
import logging

import pytest

from rterror import RTError, iter_chain
from rterror.__main__ import EXIT_OK, EXIT_USAGE, build_chain, main
from tests.conftest import strip_ansi


@pytest.fixture(autouse=True)
def restore_logger():
    """Drop the handler main() installs so later tests log normally."""
    log = logging.getLogger("rterror")
    handlers, level = list(log.handlers), log.level
    yield
    log.handlers[:] = handlers
    log.setLevel(level)


class TestBuildChain:

    @pytest.mark.parametrize("depth", [1, 2, 4, 7])
    def test_depth(self, depth):
        links = list(iter_chain(build_chain(depth)))
        assert len(links) == depth
        assert all(isinstance(link, RTError) for link in links)
        assert [link.message for link in links] == [
            f"my error message {n}" for n in range(1, depth + 1)
        ]

    def test_every_level_is_attributed_to_the_helper(self):
        links = list(iter_chain(build_chain(3)))
        assert {link.file_base for link in links} == {"__main__.py"}
        assert {link.package for link in links} == {"rterror.__main__"}
        assert len({link.line for link in links}) == 1
        assert links[0].line > 0


class TestMain:

    def test_default_output(self, capsys):
        assert main([]) == EXIT_OK
        lines = strip_ansi(capsys.readouterr().out).rstrip("\n").split("\n")
        assert len(lines) == 4
        assert lines[0].endswith("my error message 1")
        assert lines[1].startswith("`--")
        assert lines[2].startswith("   `--")
        assert lines[3].startswith("      `--")

    def test_plain(self, capsys):
        assert main(["--plain", "--depth", "2"]) == EXIT_OK
        out = capsys.readouterr().out
        assert "\x1b[" not in out
        assert out.startswith("__main__.py:")

    def test_custom_format(self, capsys):
        assert main(["--depth", "3", "--format", "{.message}"]) == EXIT_OK
        assert capsys.readouterr().out == (
            "my error message 1\n"
            "`--my error message 2\n"
            "   `--my error message 3\n"
        )

    def test_json(self, capsys):
        assert main(["--json"]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data["message"] == "my error message 1"
        assert data["arguments"] == [1]
        assert data["file"].endswith("__main__.py")

    def test_bad_depth(self, capsys):
        assert main(["--depth", "0"]) == EXIT_USAGE
        assert "usage:" in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as info:
            main(["--version"])
        assert info.value.code == 0
        assert "rterror" in capsys.readouterr().out
