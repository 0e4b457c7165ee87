"""Create the avatar cache table in PostgreSQL."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import re

from letteravatar.backend.config import load_settings

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("db_schema.sql")
_TABLE_PATTERN = re.compile(r"CREATE TABLE IF NOT EXISTS\s+(\w+)", re.IGNORECASE)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Apply the letter avatar cache schema")
    parser.add_argument("--database-url", default=None, help="Overrides LETTERAVATAR_DATABASE_URL")
    return parser.parse_args(argv)


def schema_tables(schema_sql: str) -> list[str]:
    return _TABLE_PATTERN.findall(schema_sql)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    settings = load_settings()
    logging.basicConfig(level=settings.log_level)
    database_url = args.database_url or settings.database_url
    if not database_url:
        raise RuntimeError("LETTERAVATAR_DATABASE_URL or --database-url is required for migration")

    import psycopg

    schema_sql = SCHEMA_PATH.read_text(encoding="utf-8")

    with psycopg.connect(database_url) as conn:
        with conn.cursor() as cur:
            cur.execute(schema_sql)
        conn.commit()
    logger.info("Applied avatar schema, tables: %s", ", ".join(schema_tables(schema_sql)))


if __name__ == "__main__":
    main()
