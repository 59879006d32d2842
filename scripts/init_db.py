#!/usr/bin/env python3
"""
Create (or drop and recreate) the insurance kernel schema.

Uses the resolved KernelSettings (INSURANCE_CONFIG YAML file, then
INSURANCE_DATABASE_URL), unless --db-url is given.

Usage:
  python3 scripts/init_db.py [--db-url URL] [--config PATH] [--reset]
"""

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Create the insurance kernel tables")
    p.add_argument("--config", default=None, help="YAML settings file")
    p.add_argument("--db-url", default=None, help="Database URL (overrides settings)")
    p.add_argument(
        "--reset",
        action="store_true",
        help="Drop all tables before creating them",
    )
    return p.parse_args()


def main() -> int:
    args = _parse_args()

    from insurance_kernel.config import load_settings
    from insurance_kernel.db.engine import (
        create_tables,
        drop_tables,
        init_engine_from_url,
        reset_engine,
    )
    from insurance_kernel.logging_config import configure_logging

    settings = load_settings(args.config)
    db_url = args.db_url or settings.database_url
    configure_logging(level=settings.log_level)

    try:
        init_engine_from_url(db_url, echo=settings.echo_sql)
        if args.reset:
            drop_tables()
            print("  Dropped existing tables.")
        create_tables()
    except Exception as exc:
        print(f"  ERROR: {exc}", file=sys.stderr)
        return 1
    finally:
        reset_engine()

    print(f"  Schema ready at {db_url}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
