"""
Data correction script to realign attendance record dates with timestamps.

A record's ``date`` must be the calendar day of its ``timestamp``. Rows
imported from old backups or edited by hand may break that; this script
recomputes ``date`` for every record and fixes the ones that differ.

Run with: python scripts/recompute_record_dates.py [--dry-run]
"""

import sys
import os

dry_run = "--dry-run" in sys.argv

# Add parent directory to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from asistencia.fastapi.core.utils import date_from_timestamp
from asistencia.fastapi.dependencies.database import SessionLocal
from asistencia.fastapi.models.attendance import AttendanceRecord


def recompute_dates(db, dry_run: bool = False):
    """
    Fix ``date`` on records where it does not match the timestamp.

    Args:
        db: Database session
        dry_run: If True, only report what would change

    Returns:
        (changed records, records with unparseable timestamps)
    """
    changes = []
    unparseable = []

    for record in db.query(AttendanceRecord).all():
        expected = date_from_timestamp(record.timestamp)
        if expected is None:
            unparseable.append(record.id)
            continue
        if record.date != expected:
            changes.append((record.id, record.date, expected))
            if not dry_run:
                record.date = expected

    if changes and not dry_run:
        db.commit()

    return changes, unparseable


def main():
    db = SessionLocal()
    try:
        changes, unparseable = recompute_dates(db, dry_run=dry_run)
    finally:
        db.close()

    print(f"\n{'=' * 60}")
    print("Record date correction")
    print(f"Mode: {'DRY RUN' if dry_run else 'LIVE UPDATE'}")
    print(f"{'=' * 60}")

    for record_id, old, new in changes[:10]:
        print(f"  {record_id}: {old} -> {new}")
    if len(changes) > 10:
        print(f"  ... and {len(changes) - 10} more")

    print(f"\nRecords with changes: {len(changes)}")
    print(f"Records with unparseable timestamps: {len(unparseable)}")

    if dry_run:
        print("\nDRY RUN MODE - No changes were made to the database")


if __name__ == "__main__":
    main()
