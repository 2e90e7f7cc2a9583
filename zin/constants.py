"""Constants and configuration for the zin editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    APP_NAME = "zin"
    CONFIG_FILENAME = "config.json"
    LOG_FILENAME = "zin.log"
    LOG_LEVEL_ENV = "ZIN_LOG_LEVEL"

    # Screen layout
    RESERVED_ROWS = 2  # Status bar + command line below the text rows
    EMPTY_ROW_MARKER = "~"  # Drawn on rows past the end of the document

    # Fixed Normal-mode keys (the mode keys themselves come from config)
    COMMAND_KEY = ord(':')
    DELETE_CHORD_KEY = ord('d')
    OPEN_LINE_KEY = ord('o')
    NEXT_MATCH_KEY = ord('n')
    PREVIOUS_MATCH_KEY = ord('b')

    # Input codes for named keys
    TAB_CODE = 9
    ENTER_CODE = 10
    ESCAPE_CODE = 27
    BACKSPACE_CODE = 127

    # Command line
    COMMAND_PREFIX = ":"

    # Cursor shapes (DECSCUSR)
    CURSOR_BAR = "\x1b[6 q"
    CURSOR_BLOCK = "\x1b[2 q"

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Messages
    USAGE_MESSAGE = "Usage: zin <file>"
    OPEN_FAILED_MESSAGE = "Can't open {}, make sure you have permission to read/write"
    WRITE_FAILED_MESSAGE = "Error writing {}: {}"
