from __future__ import annotations

import logging
from typing import Optional

from .emitter import CsvRow, RecordEmitter
from .errors import StructureError
from .tracker import CATEGORY_TAGS, EMITOR_TAG, LEAF_TAGS, Attributes, TagPathTracker

logger = logging.getLogger(__name__)


def strip_ns(tag: str) -> str:
    # "{namespace}Tag" -> "Tag"
    return tag.split("}", 1)[1] if "}" in tag else tag


class EventDispatcher:
    """
    Classifies start/end element events and drives the tracker and emitter.

    Start events:
      - emitor              -> remember its `nazwa`
      - category at depth 0 -> open a record (category + typ segment)
      - anything at depth>0 -> push it; leaf kinds emit a row
      - leaf kind at depth 0 -> structural anomaly, no row
    Text content carries no values and is ignored.
    """

    def __init__(
        self,
        tracker: TagPathTracker,
        emitter: RecordEmitter,
        *,
        anomaly_policy: str = "ignore",
    ) -> None:
        self.tracker = tracker
        self.emitter = emitter
        self.anomaly_policy = anomaly_policy
        self.anomalies = 0

    def start_element(self, name: str, attributes: Attributes) -> Optional[CsvRow]:
        name = strip_ns(name)
        attributes = [(strip_ns(k), v) for k, v in attributes]
        tracker = self.tracker

        if name == EMITOR_TAG:
            tracker.on_emitor_open(attributes)
            return None

        if tracker.depth == 0:
            if name in CATEGORY_TAGS:
                tracker.on_category_open(name, attributes)
            elif name in LEAF_TAGS:
                self._anomaly(f"<{name}> reading outside any status/parametr/stezenie element, skipped")
            return None

        if not tracker.on_nested_open(name, attributes):
            return None

        if tracker.emitor_name is None:
            self._anomaly(f"<{name}> reading before any emitor name")
        return self.emitter.emit(tracker.emitor_name, tracker.labels(), tracker.point_value or "")

    def end_element(self, name: str) -> None:
        self.tracker.on_element_close(strip_ns(name))

    def character_data(self, text: str) -> None:
        return None

    def _anomaly(self, message: str) -> None:
        self.anomalies += 1
        if self.anomaly_policy == "error":
            raise StructureError(message)
        if self.anomaly_policy == "warn":
            logger.warning(message)
