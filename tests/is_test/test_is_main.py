"""
Tests for the is command line entry point.
"""
import socket
import time
from unittest.mock import patch

import pytest

from predicate import PredicateRegistry

from is_test import __version__
from is_test.__main__ import main, split_global_options


class TestSplitGlobalOptions:
    """Test separating global options from the invocation."""

    def test_no_options(self):
        """Test an invocation with no global options."""
        assert split_global_options(["file", "exists", "x"]) == ([], ["file", "exists", "x"])

    def test_options_before_category(self):
        """Test that options before the category are split off."""
        assert split_global_options(["-v", "--timeout", "2", "net", "online"]) == (
            ["-v", "--timeout", "2"], ["net", "online"]
        )

    def test_operands_that_look_like_options(self):
        """Test that everything after the category is kept verbatim."""
        assert split_global_options(["string", "equal", "-a", "--verbose"]) == (
            [], ["string", "equal", "-a", "--verbose"]
        )

    def test_double_dash(self):
        """Test that -- ends global option processing."""
        assert split_global_options(["-v", "--", "-weird", "x"]) == (["-v"], ["-weird", "x"])


class TestMainExitCodes:
    """Test exit codes from the entry point."""

    def test_true(self, capsys):
        """Test that a true predicate exits 0 without output."""
        assert main(["string", "equal", "a", "a"]) == 0

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_false(self, capsys):
        """Test that a false predicate exits 1 without output."""
        assert main(["int", "gt", "1", "2"]) == 1
        assert capsys.readouterr().out == ""

    def test_usage_error(self, capsys):
        """Test that usage errors exit 2 with a message on stderr."""
        assert main(["int", "gt", "one", "2"]) == 2

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("is: ")

    def test_no_arguments(self, capsys):
        """Test that running with nothing lists categories."""
        assert main([]) == 2
        assert "Missing category" in capsys.readouterr().err

    def test_dashed_operands(self):
        """Test that operands beginning with '-' are not taken as options."""
        assert main(["string", "equal", "-v", "-v"]) == 0
        assert main(["int", "lt", "-5", "-3"]) == 0

    def test_file_predicate(self, tmp_path):
        """Test a file predicate end to end."""
        target = tmp_path / "present.txt"
        target.write_text("x", encoding="utf-8")

        assert main(["file", "exists", str(target)]) == 0
        assert main(["file", "exists", str(tmp_path / "absent.txt")]) == 1

    def test_internal_error(self, capsys):
        """Test that an unexpected failure outside evaluation exits 3."""
        with patch("is_test.__main__.PredicateRegistry.create_default", side_effect=RuntimeError("broken")):
            assert main(["string", "empty", ""]) == 3

        assert "internal error" in capsys.readouterr().err

    def test_keyboard_interrupt(self):
        """Test that an interrupt exits with the conventional code."""
        with patch("is_test.__main__.PredicateDispatcher.dispatch", side_effect=KeyboardInterrupt):
            assert main(["string", "empty", ""]) == 130


class TestMainOptions:
    """Test global options."""

    def test_list(self, capsys):
        """Test that --list prints every signature."""
        assert main(["--list"]) == 0

        output = capsys.readouterr().out
        assert "file exists <path>" in output
        assert "int in-range <value> <low> <high>" in output
        assert "net port-open <host> <port> [timeout-ms]" in output

    def test_version(self, capsys):
        """Test that --version prints the version."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    @pytest.mark.parametrize("timeout", ["0", "-1", "soon"])
    def test_invalid_timeout(self, timeout):
        """Test that an invalid timeout is rejected with the usage exit code."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--timeout", timeout, "net", "online"])

        assert exc_info.value.code == 2

    def test_timeout_passed_to_settings(self):
        """Test that --timeout reaches the network probe."""
        with patch(
            "is_test.__main__.PredicateRegistry.create_default", wraps=PredicateRegistry.create_default
        ) as mock_create:
            assert main(["--timeout", "1.5", "string", "empty", ""]) == 0

        settings = mock_create.call_args[0][0]
        assert settings.probe_timeout == 1.5

    def test_verbose_logs_to_stderr(self, capsys):
        """Test that --verbose does not disturb stdout."""
        assert main(["-v", "string", "empty", ""]) == 0
        assert capsys.readouterr().out == ""


class TestMainEdgeCases:
    """Test unusual inputs and repeated invocations."""

    def test_integer_operand_too_long(self, capsys):
        """Test that an oversized integer operand is a usage error, not an internal error."""
        assert main(["int", "eq", "9" * 5000, "9" * 5000]) == 2

        err = capsys.readouterr().err
        assert "operand 1 (num1)" in err
        assert "internal error" not in err

    def test_same_invocation_same_exit_code(self, tmp_path):
        """Test that repeating an invocation with unchanged state gives the same exit code."""
        target = tmp_path / "stable.txt"
        target.write_text("hello\n", encoding="utf-8")

        cases = [
            (["file", "non-empty", str(target)], 0),
            (["file", "exists", str(tmp_path / "absent.txt")], 1),
            (["int", "in-range", "12", "5", "10"], 1),
            (["semver", "gt", "1.2.10", "1.2.9"], 0),
            (["string", "matches-regex", "abc", "("], 2),
        ]

        for argv, expected in cases:
            assert main(argv) == expected
            assert main(argv) == expected

    def test_port_open_bounded_by_timeout_while_resolving(self):
        """Test that a hanging name lookup does not hold the command past timeout-ms."""
        def hanging_getaddrinfo(*_args, **_kwargs):
            time.sleep(3)
            raise socket.gaierror(socket.EAI_AGAIN, "Temporary failure in name resolution")

        with patch("socket.getaddrinfo", new=hanging_getaddrinfo):
            start = time.monotonic()
            code = main(["net", "port-open", "slow.example", "80", "200"])
            elapsed = time.monotonic() - start

        assert code == 1
        assert elapsed < 1.5
