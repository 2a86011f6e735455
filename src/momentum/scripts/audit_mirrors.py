"""Report sent/received messages whose mirror record is missing."""
from __future__ import annotations

import argparse
import sys

from momentum.db.session import SessionLocal
from momentum.services.messaging import MessagingService


def audit(service: MessagingService) -> list[str]:
    """Return one human-readable line per orphaned message half."""
    lines = []
    for message in service.find_orphans():
        lines.append(
            f"message {message.id} ({message.state}) "
            f"from {message.sender_id} to {message.recipient_id}: "
            f"mirror {message.mirror_id} unresolved"
        )
    return lines


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Find messages whose mirrored twin is missing")
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only set the exit status; do not print orphan details.",
    )
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        lines = audit(MessagingService(db))
    finally:
        db.close()

    if not args.quiet:
        for line in lines:
            print(f"[audit_mirrors] {line}")
        print(f"[audit_mirrors] {len(lines)} orphaned record(s)")
    return 1 if lines else 0


if __name__ == "__main__":
    sys.exit(main())
