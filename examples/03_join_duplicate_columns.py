"""Joined rows keep every column by suffixing duplicate names."""

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
    runner = QueryRunner.from_connection(sqlite3.connect(":memory:"), SQLiteDialect())

    with runner:
        runner.query("CREATE TABLE main_tbl (id INTEGER PRIMARY KEY AUTOINCREMENT, title TEXT)")
        runner.query("CREATE TABLE sub_tbl (id INTEGER PRIMARY KEY AUTOINCREMENT, main_id INTEGER, title TEXT)")

        parent = runner.query("INSERT INTO main_tbl(title) VALUES(?)", ("s", "Main")).value
        runner.query(
            "INSERT INTO sub_tbl(main_id, title) VALUES(?, ?)",
            ("is", [(parent, "first"), (parent, "second")]),
            True,
        )

        rows = runner.query(
            "SELECT m.*, s.* FROM main_tbl AS m INNER JOIN sub_tbl AS s ON s.main_id = m.id"
        )
        for row in rows:
            # Keys: id, title, id_2, main_id, title_2
            print(dict(row))

        # Rich text is sanitized before binding.
        runner.query("UPDATE main_tbl SET title = ? WHERE id = ?", ("ai", "<h1>Main &amp; more</h1>", parent))
        print(runner.query("SELECT title FROM main_tbl").value[0]["title"])


if __name__ == "__main__":
    main()
