from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .sequence import DEFAULT_BLOCK_SIZE, GrowableSequence

Attributes = Iterable[Tuple[str, str]]

EMITOR_TAG = "emitor"
CATEGORY_TAGS = frozenset({"status", "parametr", "stezenie"})
LEAF_TAGS = frozenset({"auto", "reka", "wartosc", "status", "niepewnosc", "standard"})

NAME_ATTR = "nazwa"
TYPE_ATTR = "typ"
POINT_ATTR = "pkt"


def first_attr(attributes: Attributes, key: str) -> Optional[str]:
    # first occurrence wins
    for k, v in attributes:
        if k == key:
            return v
    return None


@dataclass(frozen=True)
class PathSegment:
    """
    One open element on the tag path. A category element and its `typ`
    attribute share one segment, so they are pushed and popped together.
    """
    tag: str
    type: Optional[str] = None

    def labels(self) -> Tuple[str, ...]:
        if self.type is None:
            return (self.tag,)
        return (self.tag, self.type)


@dataclass
class EmissionRecord:
    emitor_name: Optional[str] = None
    point_value: Optional[str] = None


class TagPathTracker:
    """
    Nesting state of one parse session: the current emitor name and the
    stack of segments opened below the category element.

    The emitor name persists across sibling records until the next `emitor`
    element overwrites it, so documents must name the emitor before its
    readings.
    """

    def __init__(self, block_size: int = DEFAULT_BLOCK_SIZE) -> None:
        self.record = EmissionRecord()
        self.path: GrowableSequence[PathSegment] = GrowableSequence(block_size)

    @property
    def depth(self) -> int:
        return len(self.path)

    @property
    def emitor_name(self) -> Optional[str]:
        return self.record.emitor_name

    @property
    def point_value(self) -> Optional[str]:
        return self.record.point_value

    def labels(self) -> List[str]:
        out: List[str] = []
        for seg in self.path:
            out.extend(seg.labels())
        return out

    def on_emitor_open(self, attributes: Attributes) -> None:
        name = first_attr(attributes, NAME_ATTR)
        if name is not None:
            self.record.emitor_name = name

    def on_category_open(self, name: str, attributes: Attributes) -> None:
        if self.path:
            raise RuntimeError(f"category <{name}> opened at depth {self.depth}")
        self.path.reset()
        self.path.append(PathSegment(name, first_attr(attributes, TYPE_ATTR)))

    def on_nested_open(self, name: str, attributes: Attributes) -> bool:
        """
        Push `name` below the open category. Returns True when it is a leaf
        reading, in which case its `pkt` value becomes the current point value.
        """
        if not self.path:
            raise RuntimeError(f"<{name}> opened outside a category")
        self.path.append(PathSegment(name))
        if name not in LEAF_TAGS:
            return False
        self.record.point_value = first_attr(attributes, POINT_ATTR) or ""
        return True

    def on_element_close(self, name: str) -> None:
        top = self.path.peek()
        # elements that never pushed (emitor, ignored tags) leave depth alone
        if top is not None and top.tag == name:
            self.path.pop()
