from __future__ import annotations

from typing import Optional, TextIO

from .emitter import HEADER_LINE
from .errors import OutputError
from .sequence import GrowableSequence


class RowFlushDriver:
    """
    Drains the pending-row buffer into the CSV sink (and the console when one
    is given) after each tokenizer feed.
    """

    def __init__(self, sink: TextIO, console: Optional[TextIO] = None) -> None:
        self.sink = sink
        self.console = console
        self.rows_written = 0

    def write_header(self) -> None:
        self._write(HEADER_LINE)
        self._sync()

    def flush(self, buffer: GrowableSequence[str]) -> int:
        n = 0
        for line in buffer:
            self._write(line)
            n += 1
        self._sync()
        buffer.reset()
        self.rows_written += n
        return n

    def _write(self, line: str) -> None:
        if self.console is not None:
            print(line, end="", file=self.console)
        try:
            self.sink.write(line)
        except OSError as e:
            raise OutputError(f"Cannot write CSV output: {e}") from e

    def _sync(self) -> None:
        try:
            self.sink.flush()
        except OSError as e:
            raise OutputError(f"Cannot write CSV output: {e}") from e
