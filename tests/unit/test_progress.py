from __future__ import annotations

from unittest.mock import patch

from fairsharing_report.services.progress import ProgressTracker, is_tty_enabled


def test_is_tty_enabled_returns_stdout_isatty():
    with patch("sys.stdout.isatty", return_value=True):
        assert is_tty_enabled() is True
    with patch("sys.stdout.isatty", return_value=False):
        assert is_tty_enabled() is False


def test_tracker_with_tty():
    with patch("fairsharing_report.services.progress.is_tty_enabled", return_value=True), \
         patch("fairsharing_report.services.progress.tqdm") as mock_tqdm:
        tracker = ProgressTracker(3, description="Rows")
        mock_tqdm.assert_called_once_with(
            total=3,
            desc="Rows",
            unit="row",
            disable=False,
            leave=True,
            position=0,
            ncols=80,
            ascii=True,
        )
        pbar = mock_tqdm.return_value
        tracker.start_row(7)
        pbar.set_description.assert_called_with("Rows (row 7)")
        tracker.set_postfix(entries=1, errors=0)
        pbar.set_postfix.assert_called_once_with(entries=1, errors=0)
        tracker.finish_row()
        pbar.update.assert_called_once_with(1)
        pbar.set_description.assert_called_with("Rows")
        tracker.close()
        pbar.close.assert_called_once()
        assert tracker.pbar is None


def test_tracker_without_tty_is_inert():
    with patch("fairsharing_report.services.progress.is_tty_enabled", return_value=False), \
         patch("fairsharing_report.services.progress.tqdm") as mock_tqdm:
        with ProgressTracker(2) as tracker:
            tracker.start_row(1)
            tracker.finish_row()
            tracker.set_postfix(entries=0)
        mock_tqdm.assert_not_called()
        assert tracker.current_row == 1
