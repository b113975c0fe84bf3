from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from updateresolver.__main__ import _print_startup_error, main


@pytest.mark.unit
class TestMain:
    """Tests for main() entry point function."""

    @pytest.mark.parametrize(
        "exit_code",
        [0, 1, 3, 130],
        ids=["no-update", "error", "update-available", "interrupted"],
    )
    def test_main_returns_cli_exit_code(self, exit_code: int) -> None:
        """Test main returns the exit code from the CLI."""
        mock_cli_module = MagicMock()
        mock_cli_module.main = MagicMock(return_value=exit_code)

        with patch.dict("sys.modules", {"updateresolver.cli": mock_cli_module}):
            result = main()

        assert result == exit_code
        mock_cli_module.main.assert_called_once_with()

    def test_main_import_error_returns_one(self, capsys: pytest.CaptureFixture) -> None:
        """Test main returns 1 when the cli module cannot be imported."""
        with patch.dict("sys.modules", {"updateresolver.cli": None}):
            result = main()

        assert result == 1
        assert "ImportError:" in capsys.readouterr().err


@pytest.mark.unit
class TestPrintStartupError:
    """Tests for _print_startup_error helper function."""

    def test_writes_to_stderr(self, capsys: pytest.CaptureFixture) -> None:
        _print_startup_error(ImportError("No module named 'rich'"))

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "failed to start" in captured.err
        assert "ImportError: No module named 'rich'" in captured.err
