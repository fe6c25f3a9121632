from __future__ import annotations

from unittest.mock import patch

from inspection_import.services.progress import ProgressTracker, is_tty_enabled


def test_is_tty_enabled_returns_stdout_isatty():
    with patch("sys.stdout.isatty", return_value=True):
        assert is_tty_enabled() is True
    with patch("sys.stdout.isatty", return_value=False):
        assert is_tty_enabled() is False


class TestProgressTracker:
    def test_init_with_tty_enabled(self):
        with patch("inspection_import.services.progress.is_tty_enabled", return_value=True), \
             patch("inspection_import.services.progress.tqdm") as mock_tqdm:
            tracker = ProgressTracker(5, description="Rows")
            assert tracker.enabled is True
            mock_tqdm.assert_called_once_with(
                total=5,
                desc="Rows",
                unit="row",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )

    def test_init_without_tty(self):
        with patch("inspection_import.services.progress.is_tty_enabled", return_value=False), \
             patch("inspection_import.services.progress.tqdm") as mock_tqdm:
            tracker = ProgressTracker(5)
            assert tracker.enabled is False
            assert tracker.pbar is None
            mock_tqdm.assert_not_called()
            tracker.advance()
            tracker.set_postfix(accepted=1)
            tracker.close()
            assert tracker.current_row == 1

    def test_advance_and_close_update_bar(self):
        with patch("inspection_import.services.progress.is_tty_enabled", return_value=True), \
             patch("inspection_import.services.progress.tqdm") as mock_tqdm:
            bar = mock_tqdm.return_value
            with ProgressTracker(3) as tracker:
                tracker.advance()
                tracker.advance(2)
                tracker.set_description("2월")
                tracker.set_postfix(accepted=2, rejected=1)
            assert tracker.current_row == 3
            assert bar.update.call_count == 2
            bar.set_description.assert_called_once_with("Mapping rows (2월)")
            bar.set_postfix.assert_called_once_with(accepted=2, rejected=1)
            bar.close.assert_called_once()
            assert tracker.pbar is None
