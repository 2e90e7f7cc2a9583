"""zin CLI entry point.

Allows running via `python -m zin` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import sys

from .buffer import BufferOpenError, BufferWriteError, TextBuffer
from .config import configure_logging
from .constants import EditorConstants
from .version import get_version_string


def main() -> None:
    # Very small arg parsing: a filename, or the version flag
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return
    if len(args) != 1:
        print(EditorConstants.USAGE_MESSAGE)
        sys.exit(1)

    configure_logging()
    path = args[0]

    # Open the file before any editing or terminal state exists
    try:
        buffer = TextBuffer.load(path)
    except BufferOpenError:
        print(EditorConstants.OPEN_FAILED_MESSAGE.format(path))
        sys.exit(1)

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    with buffer:
        editor = Editor(buffer)
        try:
            editor.run()
        except BufferWriteError as e:
            print(EditorConstants.WRITE_FAILED_MESSAGE.format(path, e.reason), file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
