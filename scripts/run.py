from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# make src importable without installing
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from emitorxml.config import ANOMALY_POLICIES, Settings
from emitorxml.errors import EmitorXmlError
from emitorxml.pipeline import run


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Convert every emitor XML file in a directory to CSV.")
    p.add_argument("--xml-dir", required=True, help="Directory searched recursively for *.xml")
    p.add_argument("--out-dir", default="outputs", help="Where <stem>.csv files and run.json go (default: outputs)")
    p.add_argument("--anomalies", choices=ANOMALY_POLICIES, default=None, help="Anomaly policy override")
    return p.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    logger = logging.getLogger("emitorxml")
    try:
        settings = Settings.from_env().override(anomaly_policy=args.anomalies)
        results = run(args.xml_dir, args.out_dir, settings=settings)
    except (ValueError, FileNotFoundError, EmitorXmlError) as e:
        logger.error("%s", e)
        return 1
    except OSError as e:
        logger.error("I/O error: %s", e)
        return 1

    for r in results:
        print(f"  {Path(r.input_path).name:40s} {r.rows} rows")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
