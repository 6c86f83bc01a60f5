from .config import Settings
from .errors import EmitorXmlError, MalformedXmlError, OutputError, StructureError
from .session import ConversionResult, ParseSession, convert_file, convert_stream

__all__ = [
    "Settings",
    "EmitorXmlError",
    "MalformedXmlError",
    "OutputError",
    "StructureError",
    "ConversionResult",
    "ParseSession",
    "convert_file",
    "convert_stream",
]
