"""Entrypoint: extract a series name with one Bedrock backend."""

from __future__ import annotations

from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from bedrock_series.cli import main


if __name__ == "__main__":
    main()
