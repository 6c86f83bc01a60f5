from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Iterator, List, Optional, Tuple

from lxml import etree

from .errors import MalformedXmlError


@dataclass(frozen=True)
class XmlEvent:
    kind: str  # "start" | "end"
    tag: str
    attrib: Tuple[Tuple[str, str], ...] = ()


def iter_chunks(fileobj: BinaryIO, chunk_size: int) -> Iterator[bytes]:
    while True:
        chunk = fileobj.read(chunk_size)
        if not chunk:
            return
        yield chunk


class XmlChunkReader:
    """
    Push-style XML tokenizer over lxml's XMLPullParser.
    Each feed() returns the start/end events completed by that chunk, in
    document order. Finished elements are dropped right away so the partial
    tree never grows with the document.
    """

    def __init__(self) -> None:
        self._parser = etree.XMLPullParser(
            events=("start", "end"),
            huge_tree=True,
            remove_comments=True,
            remove_pis=True,
        )
        self._closed = False

    def feed(self, chunk: bytes) -> List[XmlEvent]:
        try:
            self._parser.feed(chunk)
            return self._drain()
        except etree.XMLSyntaxError as e:
            raise _malformed(e) from e

    def close(self) -> List[XmlEvent]:
        """
        Signal end of input. A truncated or empty document fails here.
        """
        if self._closed:
            return []
        self._closed = True
        try:
            self._parser.close()
            return self._drain()
        except etree.XMLSyntaxError as e:
            raise _malformed(e) from e

    def _drain(self) -> List[XmlEvent]:
        out: List[XmlEvent] = []
        for event, elem in self._parser.read_events():
            if event == "start":
                out.append(XmlEvent("start", elem.tag, tuple(elem.attrib.items())))
                continue

            out.append(XmlEvent("end", elem.tag))
            # keep only the open ancestors alive
            elem.clear()
            parent = elem.getparent()
            if parent is not None:
                while elem.getprevious() is not None:
                    del parent[0]
        return out


def _malformed(err: etree.XMLSyntaxError) -> MalformedXmlError:
    message = getattr(err, "msg", None) or str(err)
    line: Optional[int] = getattr(err, "lineno", None)
    if line is None and getattr(err, "position", None):
        line = err.position[0]
    return MalformedXmlError(message, line)
