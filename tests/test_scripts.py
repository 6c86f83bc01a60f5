import importlib.util
import sys
from pathlib import Path

import pytest

from conftest import SAMPLE_XML

SCRIPTS_DIR = Path(__file__).resolve().parents[1] / "scripts"


@pytest.fixture
def run_script():
    loader = importlib.util.spec_from_file_location("emitor_run_script", SCRIPTS_DIR / "run.py")
    module = importlib.util.module_from_spec(loader)
    loader.loader.exec_module(module)
    return module


def test_batch_script_converts(tmp_path, monkeypatch, run_script):
    src = tmp_path / "xml"
    src.mkdir()
    (src / "k3.xml").write_bytes(SAMPLE_XML)
    monkeypatch.setattr(sys, "argv", ["run.py", "--xml-dir", str(src), "--out-dir", str(tmp_path / "csv")])

    assert run_script.main() == 0
    assert (tmp_path / "csv" / "k3.csv").exists()


def test_batch_script_bad_env_setting_returns_one(tmp_path, monkeypatch, run_script):
    src = tmp_path / "xml"
    src.mkdir()
    monkeypatch.setenv("EMITOR_ANOMALY_POLICY", "loud")
    monkeypatch.setattr(sys, "argv", ["run.py", "--xml-dir", str(src)])

    assert run_script.main() == 1


def test_batch_script_missing_dir_returns_one(tmp_path, monkeypatch, run_script):
    monkeypatch.setattr(sys, "argv", ["run.py", "--xml-dir", str(tmp_path / "nope")])

    assert run_script.main() == 1


def test_batch_script_unwritable_output_returns_one(tmp_path, monkeypatch, run_script):
    src = tmp_path / "xml"
    src.mkdir()
    (src / "k3.xml").write_bytes(SAMPLE_XML)
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    monkeypatch.setattr(sys, "argv", ["run.py", "--xml-dir", str(src), "--out-dir", str(blocker / "csv")])

    assert run_script.main() == 1
