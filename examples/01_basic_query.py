"""Basic prepared-statement queries with mini_stmt QueryRunner."""

from __future__ import annotations

import sqlite3
import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "mini_stmt").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mini_stmt import QueryRunner, SQLiteDialect


def main() -> None:
    # 1) Wrap an open DB-API connection.
    runner = QueryRunner.from_connection(sqlite3.connect(":memory:"), SQLiteDialect())

    with runner:
        # 2) DDL has no placeholders and returns Done.
        runner.query("CREATE TABLE posts (id INTEGER PRIMARY KEY AUTOINCREMENT, title TEXT, views INTEGER)")

        # 3) Insert: the tag string comes first, one tag per placeholder.
        inserted = runner.query("INSERT INTO posts(title, views) VALUES(?, ?)", ("si", "Hello", "12"))
        print("Inserted id:", inserted.value)

        # 4) Update returns the affected row count.
        updated = runner.query("UPDATE posts SET views = ? WHERE id = ?", ("ii", 13, inserted.value))
        print("Updated rows:", updated.value)

        # 5) Select returns read-only row mappings.
        rows = runner.query("SELECT * FROM posts WHERE id = ?", ("i", inserted.value))
        print("Rows:", [dict(row) for row in rows])

        # 6) Failures are values, not exceptions.
        failed = runner.query("SELECT * FROM posts WHERE id = ?", ("ii", 1, 2))
        print("Failure:", failed.kind.value, failed.message)

        # 7) Telemetry describes the last query.
        print("Last SQL:", runner.telemetry.sql, "took", runner.telemetry.duration_micros, "us")

        print("Tables:", runner.show_tables())
        print("Columns:", runner.show_columns_from("posts"))


if __name__ == "__main__":
    main()
