"""System clipboard access for paste."""

import logging

import pyperclip

logger = logging.getLogger(__name__)


class ClipboardError(Exception):
    """Raised when the system clipboard cannot be read."""


class ClipboardManager:
    """Reads plain text from the system clipboard via pyperclip.

    A failed read raises ClipboardError and never touches any line; the
    caller decides how to report it.
    """

    @staticmethod
    def paste_text() -> str:
        """Return the clipboard contents as plain text.

        Raises:
            ClipboardError: if no clipboard mechanism is available or the
                read fails
        """
        try:
            content = pyperclip.paste()
        except pyperclip.PyperclipException as e:
            logger.warning(f"Could not read clipboard: {e}")
            raise ClipboardError(str(e)) from e
        return content or ""
