# src/campus_qa/scripts/auto_approve.py
"""Operator switch for the forum-wide auto-approve flag.

Typical usage:
  campus-qa-auto-approve on
  campus-qa-auto-approve off
  campus-qa-auto-approve status
"""

from __future__ import annotations

import argparse
import sys

from sqlalchemy.orm import Session

from campus_qa.db.session import SessionLocal
from campus_qa.services.lifecycle import get_auto_approve, store_auto_approve


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="campus-qa-auto-approve",
        description="Show or change whether new questions and answers skip moderation.",
    )
    parser.add_argument("state", choices=("on", "off", "status"))
    return parser


def run(db: Session, state: str) -> str:
    """Apply ``state`` and return the line to print."""
    if state != "status":
        store_auto_approve(db, state == "on")
    enabled = get_auto_approve(db)
    return f"Auto-approve is {'enabled' if enabled else 'disabled'}"


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    db = SessionLocal()
    try:
        print(run(db, args.state))
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
