"""Multi-row INSERT through one prepared statement."""

from __future__ import annotations

import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "mini_stmt").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mini_stmt import ConnectionConfig, QueryRunner


def main() -> None:
    runner = QueryRunner.from_config(ConnectionConfig(driver="sqlite", name=":memory:"))

    with runner:
        runner.query("CREATE TABLE tags (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT UNIQUE, weight REAL)")

        # 1) Every row is bound and executed in order; ids come back per row.
        batch = runner.query(
            "INSERT INTO tags(name, weight) VALUES(?, ?)",
            ("sd", [("python", 1.5), ("sql", "2.25"), ("orm", 0.5)]),
            True,
        )
        print("Batch ok:", batch.ok, "ids:", batch.value)

        # 2) Rows before a failing row stay inserted.
        partial = runner.query(
            "INSERT INTO tags(name, weight) VALUES(?, ?)",
            ("sd", [("cli", 1.0), ("broken",), ("never", 2.0)]),
            True,
        )
        print("Batch ok:", partial.ok, "failed row:", partial.failed_row)
        for outcome in partial:
            print("  ", outcome)

        print("Stored:", [row["name"] for row in runner.query("SELECT name FROM tags ORDER BY id")])


if __name__ == "__main__":
    main()
