"""Constants and configuration defaults for promptline."""

class LineConstants:
    """Central configuration constants for the prompt editor."""

    # Prompt layout
    DEFAULT_PROMPT = "> "
    DEFAULT_LINE_MODE = "scroll"
    BOX_BORDER_COLUMNS = 2  # One border column on each side of the prompt box
    MIN_TERMINAL_WIDTH = 20
    MIN_TERMINAL_HEIGHT = 4

    # History
    DEFAULT_HISTORY_LIMIT = 500
    MAX_HISTORY_LIMIT = 10000

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Settings storage
    APP_NAME = "promptline"
    SETTINGS_FILENAME = "settings.json"

    # Status messages
    HELP_HINT = "F1 for help"
    PASTE_FAILED_MESSAGE = "Paste failed: {}"
    TERMINAL_TOO_SMALL_MESSAGE = "Terminal too small! Need at least {}x{}."
