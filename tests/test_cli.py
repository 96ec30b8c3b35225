"""Tests for the exprcalc command line interface."""

import pytest

from exprcalc.cli import main


@pytest.fixture(autouse=True)
def _restore_logging(restore_root_logger):
    yield


class TestCli:
    """Test main()."""

    def test_prints_result(self, capsys):
        """Test a successful evaluation."""
        assert main(["2 + 3"]) == 0
        assert capsys.readouterr().out == "5\n"

    def test_definitions(self, capsys):
        """Test symbols defined with -D."""
        assert main(["x * 2", "-D", "x=2.5"]) == 0
        assert capsys.readouterr().out == "5\n"

        assert main(["name & '!'", "--define", "name=Bob"]) == 0
        assert capsys.readouterr().out == "Bob!\n"

    def test_show_type(self, capsys):
        """Test --type output."""
        assert main(["7 / 2", "--type"]) == 0
        assert capsys.readouterr().out == "3 (integer)\n"

    def test_error_exit_code(self, capsys):
        """Test an invalid expression prints a caret and exits 1."""
        assert main(["2 +"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        lines = captured.err.splitlines()
        assert lines[0] == "2 +"
        assert lines[1] == "   ^"
        assert lines[2] == "Error: Operand expected (column 4)"

    def test_bad_definition(self):
        """Test a malformed -D argument."""
        with pytest.raises(SystemExit) as exc_info:
            main(["1", "-D", "oops"])
        assert exc_info.value.code == 2
