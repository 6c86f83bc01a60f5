import sys
from pathlib import Path

# make src importable without installing
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from emitorxml.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
