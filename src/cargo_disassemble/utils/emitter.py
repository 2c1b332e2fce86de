import sys
from typing import Optional, TextIO

from rich.console import Console

from .highlighter import highlight_line


def is_header(line: str) -> bool:
    """Function headers are the only output lines starting in column 0 without a dot."""
    return bool(line) and not line.startswith((" ", "\t", "."))


class PlainEmitter:
    """Writes lines unchanged, one per line."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout
        self.count = 0

    def emit(self, line: str):
        self.stream.write(line + "\n")
        self.count += 1

    def flush(self):
        self.stream.flush()


class ConsoleEmitter:
    """Writes lines through rich with assembly highlighting."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console if console is not None else Console()
        self.count = 0

    def emit(self, line: str):
        self.console.print(highlight_line(line, header=is_header(line)), soft_wrap=True)
        self.count += 1

    def flush(self):
        self.console.file.flush()


def make_emitter(color: str = "auto", stream: Optional[TextIO] = None):
    """
    color: 'always' highlights, 'never' writes plain text, 'auto' highlights
    only when the output stream is a terminal.
    """
    stream = stream if stream is not None else sys.stdout
    if color == "never":
        return PlainEmitter(stream)
    if color == "always":
        return ConsoleEmitter(Console(file=stream, force_terminal=True))
    if stream.isatty():
        return ConsoleEmitter(Console(file=stream))
    return PlainEmitter(stream)
