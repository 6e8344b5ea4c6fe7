from __future__ import annotations

from unittest.mock import Mock, patch

from manifest_resolver.services.progress import ProgressTracker, is_tty_enabled


def test_is_tty_enabled_returns_stdout_isatty():
    with patch("sys.stdout.isatty", return_value=True):
        assert is_tty_enabled() is True
    with patch("sys.stdout.isatty", return_value=False):
        assert is_tty_enabled() is False


class TestProgressTracker:

    def test_init_with_tty_enabled(self):
        with patch("manifest_resolver.services.progress.is_tty_enabled", return_value=True), \
             patch("manifest_resolver.services.progress.tqdm") as mock_tqdm:
            tracker = ProgressTracker(3, description="Test sheets")
            assert tracker.enabled is True
            mock_tqdm.assert_called_once_with(
                total=3,
                desc="Test sheets",
                unit="sheet",
                disable=False,
                leave=False,
                position=0,
                ncols=80,
                ascii=True,
            )

    def test_init_with_tty_disabled(self):
        with patch("manifest_resolver.services.progress.is_tty_enabled", return_value=False):
            tracker = ProgressTracker(3)
            assert tracker.enabled is False
            assert tracker.pbar is None
            tracker.sheet_done("Reach")
            assert tracker.current_sheet == 1

    def test_sheet_done_updates_bar(self):
        mock_pbar = Mock()
        with patch("manifest_resolver.services.progress.is_tty_enabled", return_value=True), \
             patch("manifest_resolver.services.progress.tqdm", return_value=mock_pbar):
            tracker = ProgressTracker(2)
            tracker.sheet_done("MCC Base")
            mock_pbar.set_postfix.assert_called_once_with(sheet="MCC Base")
            mock_pbar.update.assert_called_once_with(1)

    def test_context_manager_closes_bar(self):
        mock_pbar = Mock()
        with patch("manifest_resolver.services.progress.is_tty_enabled", return_value=True), \
             patch("manifest_resolver.services.progress.tqdm", return_value=mock_pbar):
            with ProgressTracker(1) as tracker:
                pass
            mock_pbar.close.assert_called_once()
            assert tracker.pbar is None

    def test_set_total_resets_bar(self):
        mock_pbar = Mock()
        with patch("manifest_resolver.services.progress.is_tty_enabled", return_value=True), \
             patch("manifest_resolver.services.progress.tqdm", return_value=mock_pbar):
            tracker = ProgressTracker(0)
            tracker.set_total(3)
            assert tracker.total_sheets == 3
            mock_pbar.reset.assert_called_once_with(total=3)

    def test_set_total_without_tty(self):
        with patch("manifest_resolver.services.progress.is_tty_enabled", return_value=False):
            tracker = ProgressTracker(0)
            tracker.set_total(2)
            assert tracker.total_sheets == 2
