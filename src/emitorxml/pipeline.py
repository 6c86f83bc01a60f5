from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

from .config import Settings
from .session import ConversionResult, convert_file

logger = logging.getLogger(__name__)


def discover_xml_files(xml_dir: Path) -> List[Path]:
    files = {p for p in xml_dir.rglob("*") if p.is_file() and p.suffix.lower() == ".xml"}
    return sorted(files)


def run(xml_dir: str | Path, out_dir: str | Path = "outputs", *, settings: Optional[Settings] = None) -> List[ConversionResult]:
    """
    Convert every XML file under `xml_dir` into `<out_dir>/<relative path>.csv`.
    Files are processed one after another, each with a fresh session; the
    first failure stops the batch.
    """
    xml_root = Path(xml_dir)
    if not xml_root.exists():
        raise FileNotFoundError(f"Directory not found: {xml_dir}")

    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    files = discover_xml_files(xml_root)
    if not files:
        logger.warning("No XML files found in %s", xml_dir)
        return []

    results: List[ConversionResult] = []
    for f in files:
        print("Processing:", f.name)
        # mirror the input tree so equal stems in different folders stay apart
        target = out / f.relative_to(xml_root).with_suffix(".csv")
        target.parent.mkdir(parents=True, exist_ok=True)
        result = convert_file(f, target, settings=settings)
        results.append(result)

    (out / "run.json").write_text(
        json.dumps([asdict(r) for r in results], ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    print("Done. Outputs in:", out)
    return results
