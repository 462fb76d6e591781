# vs_sdk_audit/main.py
from __future__ import annotations
import sys

from .cli import run_cli


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    return run_cli(argv)

if __name__ == "__main__":
    raise SystemExit(main())
