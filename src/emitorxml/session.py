from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, Optional, TextIO

from .config import Settings
from .dispatcher import EventDispatcher
from .emitter import Clock, RecordEmitter
from .errors import OutputError
from .flush import RowFlushDriver
from .reader import XmlChunkReader, XmlEvent, iter_chunks
from .sequence import GrowableSequence
from .tracker import TagPathTracker

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    input_path: Optional[str]
    output_path: Optional[str]
    rows: int
    chunks: int
    anomalies: int


class ParseSession:
    """
    State for converting one document: tracker, pending rows, dispatcher and
    tokenizer. Nothing is shared between sessions.
    """

    def __init__(self, settings: Optional[Settings] = None, *, clock: Optional[Clock] = None) -> None:
        self.settings = settings or Settings()
        self.tracker = TagPathTracker(self.settings.block_size)
        self.pending: GrowableSequence[str] = GrowableSequence(self.settings.block_size)
        self.emitter = RecordEmitter(self.pending, clock)
        self.dispatcher = EventDispatcher(
            self.tracker,
            self.emitter,
            anomaly_policy=self.settings.anomaly_policy,
        )
        self._reader = XmlChunkReader()

    def feed(self, chunk: bytes) -> int:
        """
        Tokenize one chunk and dispatch its events. Returns rows now pending.
        """
        self._dispatch(self._reader.feed(chunk))
        return len(self.pending)

    def close(self) -> int:
        self._dispatch(self._reader.close())
        return len(self.pending)

    def _dispatch(self, events: Iterable[XmlEvent]) -> None:
        for ev in events:
            if ev.kind == "start":
                self.dispatcher.start_element(ev.tag, ev.attrib)
            else:
                self.dispatcher.end_element(ev.tag)


def convert_stream(
    source: BinaryIO,
    sink: TextIO,
    *,
    settings: Optional[Settings] = None,
    console: Optional[TextIO] = None,
    clock: Optional[Clock] = None,
) -> ConversionResult:
    """
    Feed `source` chunk by chunk; after every chunk the pending rows go to
    `sink` (and `console`). A parse error propagates before that chunk's
    rows are written.
    """
    settings = settings or Settings()
    session = ParseSession(settings, clock=clock)
    driver = RowFlushDriver(sink, console)

    driver.write_header()

    chunks = 0
    for chunk in iter_chunks(source, settings.chunk_size):
        session.feed(chunk)
        driver.flush(session.pending)
        chunks += 1

    session.close()
    driver.flush(session.pending)

    return ConversionResult(
        input_path=getattr(source, "name", None),
        output_path=getattr(sink, "name", None),
        rows=driver.rows_written,
        chunks=chunks,
        anomalies=session.dispatcher.anomalies,
    )


def convert_file(
    xml_path: str | Path,
    csv_path: str | Path,
    *,
    settings: Optional[Settings] = None,
    console: Optional[TextIO] = None,
    clock: Optional[Clock] = None,
) -> ConversionResult:
    xml_path = Path(xml_path)
    csv_path = Path(csv_path)
    if not xml_path.exists():
        raise FileNotFoundError(f"XML not found: {xml_path}")

    settings = settings or Settings()

    with xml_path.open("rb") as source:
        try:
            sink = csv_path.open("w", encoding=settings.encoding, newline="")
        except OSError as e:
            raise OutputError(f"Cannot open CSV output {csv_path}: {e}") from e
        with sink:
            logger.info("Converting %s -> %s", xml_path, csv_path)
            result = convert_stream(source, sink, settings=settings, console=console, clock=clock)

    result.input_path = str(xml_path)
    result.output_path = str(csv_path)
    logger.info("Wrote %d row(s) from %d chunk(s) to %s", result.rows, result.chunks, csv_path)
    return result
