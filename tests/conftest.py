from datetime import datetime

import pytest

FIXED_NOW = datetime(2024, 10, 1, 9, 5, 30)

SAMPLE_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<dane>
  <emitor nazwa="K3">
    <status typ="pyl">
      <reka pkt="1012"/>
      <auto pkt="1013"/>
    </status>
    <parametr typ="O2">
      <wartosc pkt="2001"/>
      <niepewnosc pkt="2002"/>
    </parametr>
    <stezenie>
      <standard pkt="3001"/>
    </stezenie>
  </emitor>
  <emitor nazwa="K4">
    <stezenie typ="SO2">
      <status pkt="4001"/>
    </stezenie>
  </emitor>
</dane>
"""

SAMPLE_PATHS = [
    "K3.status.pyl.reka",
    "K3.status.pyl.auto",
    "K3.parametr.O2.wartosc",
    "K3.parametr.O2.niepewnosc",
    "K3.stezenie.standard",
    "K4.stezenie.SO2.status",
]


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ("EMITOR_CHUNK_SIZE", "EMITOR_BLOCK_SIZE", "EMITOR_ANOMALY_POLICY", "EMITOR_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
