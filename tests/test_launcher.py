"""Tests for the development launcher (run.py)."""

import sys
from unittest.mock import MagicMock, patch

import pytest

from run import (
    BACKEND_DIR,
    CheckError,
    CheckWarning,
    build_backend_command,
    create_argument_parser,
    main,
)


class TestBuildBackendCommand:
    def test_default_command_reloads(self):
        cmd = build_backend_command("localhost", 8000)
        assert cmd[:4] == [sys.executable, "-m", "uvicorn", "app.main:app"]
        assert cmd[cmd.index("--port") + 1] == "8000"
        assert cmd[cmd.index("--host") + 1] == "localhost"
        assert "--reload" in cmd

    def test_no_reload(self):
        assert "--reload" not in build_backend_command("0.0.0.0", 9000, reload=False)


class TestPrerequisiteChecker:
    def test_missing_api_key_is_a_warning(self, checker_factory):
        checker = checker_factory()
        with pytest.raises(CheckWarning, match="GEMINI_API_KEY"):
            checker.check_api_key()

    def test_api_key_present(self, checker_factory):
        checker_factory(GEMINI_API_KEY="abc").check_api_key()

    def test_missing_dependency_is_an_error(self, checker_factory):
        checker = checker_factory(GEMINI_API_KEY="abc")
        with patch("run.importlib.util.find_spec", return_value=None):
            with pytest.raises(CheckError, match="fastapi"):
                checker.check_dependencies()

    def test_run_all_collects_warnings(self, checker_factory, capsys):
        checker = checker_factory()
        with patch("run.importlib.util.find_spec", return_value=object()):
            assert checker.run_all() is True
        assert len(checker.warnings) == 1
        assert "GEMINI_API_KEY" in capsys.readouterr().out

    def test_run_all_fails_on_error(self, checker_factory):
        checker = checker_factory(GEMINI_API_KEY="abc")
        with patch("run.importlib.util.find_spec", return_value=None):
            assert checker.run_all() is False


class TestMain:
    def test_parser_defaults(self):
        args = create_argument_parser().parse_args([])
        assert args.host == "localhost"
        assert args.port == 8000
        assert not args.no_reload

    def test_check_only_does_not_start(self):
        with patch("run.PrerequisiteChecker.run_all", return_value=True), \
             patch("run.subprocess.run") as mock_run:
            assert main(["--check-only"]) == 0
        mock_run.assert_not_called()

    def test_failed_checks_abort(self):
        with patch("run.PrerequisiteChecker.run_all", return_value=False), \
             patch("run.subprocess.run") as mock_run:
            assert main([]) == 1
        mock_run.assert_not_called()

    def test_starts_uvicorn_in_backend_dir(self):
        result = MagicMock(returncode=0)
        with patch("run.subprocess.run", return_value=result) as mock_run:
            assert main(["--skip-checks", "--port", "9001", "--no-reload"]) == 0
        cmd = mock_run.call_args.args[0]
        assert "9001" in cmd
        assert "--reload" not in cmd
        assert mock_run.call_args.kwargs["cwd"] == str(BACKEND_DIR)
