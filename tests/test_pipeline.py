import json

import pytest

from emitorxml.config import Settings
from emitorxml.errors import MalformedXmlError
from emitorxml.pipeline import discover_xml_files, run

from conftest import SAMPLE_PATHS, SAMPLE_XML


def test_discover_xml_files(tmp_path):
    (tmp_path / "a.xml").write_bytes(SAMPLE_XML)
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "B.XML").write_bytes(SAMPLE_XML)
    (tmp_path / "notes.txt").write_text("x")

    found = discover_xml_files(tmp_path)

    assert [p.name for p in found] == ["a.xml", "B.XML"]


def test_run_converts_each_file(tmp_path):
    src = tmp_path / "xml"
    src.mkdir()
    (src / "k3.xml").write_bytes(SAMPLE_XML)
    (src / "k5.xml").write_bytes(b'<emitor nazwa="K5"><parametr typ="NOx"><auto pkt="7"/></parametr></emitor>')
    out = tmp_path / "csv"

    results = run(src, out, settings=Settings(chunk_size=16))

    assert [r.rows for r in results] == [len(SAMPLE_PATHS), 1]
    k5 = (out / "k5.csv").read_text(encoding="utf-8").splitlines()
    assert k5[1].endswith('"K5.parametr.NOx.auto","7"')

    summary = json.loads((out / "run.json").read_text(encoding="utf-8"))
    assert [s["rows"] for s in summary] == [len(SAMPLE_PATHS), 1]


def test_run_stops_on_first_malformed_file(tmp_path):
    src = tmp_path / "xml"
    src.mkdir()
    (src / "a.xml").write_bytes(b"<emitor>")
    (src / "b.xml").write_bytes(SAMPLE_XML)

    with pytest.raises(MalformedXmlError):
        run(src, tmp_path / "csv")
    assert not (tmp_path / "csv" / "b.csv").exists()


def test_run_missing_dir(tmp_path):
    with pytest.raises(FileNotFoundError):
        run(tmp_path / "nope", tmp_path / "csv")


def test_run_empty_dir(tmp_path):
    assert run(tmp_path, tmp_path / "csv") == []


def test_same_stem_in_different_folders_keeps_both_outputs(tmp_path):
    src = tmp_path / "xml"
    (src / "a").mkdir(parents=True)
    (src / "b").mkdir()
    (src / "a" / "day.xml").write_bytes(b'<emitor nazwa="A"><status><reka pkt="1"/></status></emitor>')
    (src / "b" / "day.xml").write_bytes(b'<emitor nazwa="B"><status><reka pkt="2"/></status></emitor>')
    out = tmp_path / "csv"

    results = run(src, out)

    assert len({r.output_path for r in results}) == 2
    a_lines = (out / "a" / "day.csv").read_text(encoding="utf-8").splitlines()
    b_lines = (out / "b" / "day.csv").read_text(encoding="utf-8").splitlines()
    assert a_lines[1].endswith('"A.status.reka","1"')
    assert b_lines[1].endswith('"B.status.reka","2"')
