from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import ANOMALY_POLICIES, Settings
from .errors import EmitorXmlError
from .session import convert_file

logger = logging.getLogger("emitorxml")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="emitor-csv",
        description="Convert emitor XML readings into timestamped CSV rows (streaming).",
    )
    p.add_argument("input", help="Input XML file (*.xml)")
    p.add_argument("output", help="Output CSV file (*.csv)")
    p.add_argument("-v", "--verbose", action="store_true", help="Echo the header and every row to the console")
    p.add_argument("--chunk-size", type=int, default=None, help="Bytes fed to the XML parser per step (default: 1024)")
    p.add_argument(
        "--anomalies",
        choices=ANOMALY_POLICIES,
        default=None,
        help="Readings outside a category or before an emitor name: ignore (default), warn or error",
    )
    return p.parse_args(argv)


def check_paths(input_path: str, output_path: str) -> None:
    if Path(input_path).suffix.lower() != ".xml":
        raise ValueError(f"Input file must end in .xml: {input_path}")
    if Path(output_path).suffix.lower() != ".csv":
        raise ValueError(f"Output file must end in .csv: {output_path}")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        settings = Settings.from_env().override(
            chunk_size=args.chunk_size,
            anomaly_policy=args.anomalies,
            verbose=args.verbose or None,
        )
    except ValueError as e:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
        logger.error("%s", e)
        return 1

    level = settings.log_level or ("INFO" if settings.verbose else "WARNING")
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    try:
        check_paths(args.input, args.output)
        result = convert_file(
            args.input,
            args.output,
            settings=settings,
            console=sys.stdout if settings.verbose else None,
        )
    except (ValueError, FileNotFoundError, EmitorXmlError) as e:
        logger.error("%s", e)
        return 1
    except OSError as e:
        logger.error("I/O error: %s", e)
        return 1
    except MemoryError:
        logger.error("Out of memory while buffering rows")
        return 1

    logger.info("Rows: %d", result.rows)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
