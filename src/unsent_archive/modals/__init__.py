"""Modal screens for the archive TUI.

Import modals from this package: ``from unsent_archive.modals import HelpScreen``
"""

from unsent_archive.modals.common import ConfirmModal, HelpScreen
from unsent_archive.modals.focus import EntryFocusScreen

__all__ = [
    "ConfirmModal",
    "EntryFocusScreen",
    "HelpScreen",
]
