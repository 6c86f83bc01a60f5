from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from .sequence import GrowableSequence

HEADER_FIELDS = ["YYYY-MM-DD", "Hour", "Emitor.Tags", "Pkt_Value"]

Clock = Callable[[], datetime]


def format_csv_line(fields: Iterable[str]) -> str:
    buf = io.StringIO()
    csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n").writerow(list(fields))
    return buf.getvalue()


HEADER_LINE = format_csv_line(HEADER_FIELDS)


def dotted_path(emitor_name: Optional[str], labels: Iterable[str]) -> str:
    # the emitor always leads, even when unset ("" -> leading dot)
    return ".".join([emitor_name or "", *labels])


@dataclass(frozen=True)
class CsvRow:
    date: str
    hour: int
    dotted_path: str
    value: str

    def fields(self) -> List[str]:
        return [self.date, str(self.hour), self.dotted_path, self.value]

    def to_line(self) -> str:
        return format_csv_line(self.fields())


def build_row(emitor_name: Optional[str], labels: Iterable[str], value: str, now: datetime) -> CsvRow:
    return CsvRow(
        date=f"{now.year:d}-{now.month:02d}-{now.day:02d}",
        hour=now.hour,
        dotted_path=dotted_path(emitor_name, labels),
        value=value,
    )


class RecordEmitter:
    """
    Turns a completed leaf reading into a CSV row stamped with the local time
    of processing and queues its text in the pending-row buffer.
    """

    def __init__(self, buffer: GrowableSequence[str], clock: Optional[Clock] = None) -> None:
        self.buffer = buffer
        self.clock: Clock = clock or datetime.now
        self.emitted = 0

    def emit(self, emitor_name: Optional[str], labels: Iterable[str], value: str) -> CsvRow:
        row = build_row(emitor_name, labels, value, self.clock())
        self.buffer.append(row.to_line())
        self.emitted += 1
        return row
