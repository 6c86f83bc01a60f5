from __future__ import annotations

from typing import Optional


class EmitorXmlError(Exception):
    """Base class for fatal conversion errors."""


class MalformedXmlError(EmitorXmlError):
    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.message = message
        self.line = line
        where = f" at line {line}" if line is not None else ""
        super().__init__(f"{message}{where}")


class OutputError(EmitorXmlError):
    """The CSV sink could not be opened or written."""


class StructureError(EmitorXmlError):
    """Unexpected nesting, raised only when the anomaly policy is 'error'."""
