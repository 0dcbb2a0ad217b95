"""Module entrypoint for running Gleaner as ``python -m gleaner``."""

from __future__ import annotations

from gleaner.cli import main


if __name__ == "__main__":
    main()
