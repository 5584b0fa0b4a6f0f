from __future__ import annotations

import unittest

from mini_stmt.core.errors import BindResultError, DuplicateColumnOverflow
from mini_stmt.core.materializer import (
    MAX_DUPLICATE_SUFFIX,
    build_row,
    materialize,
    resolve_column_names,
)
from mini_stmt.core.statement_kind import StatementKind, classify, leading_verb


class _BufferedStatement:
    def __init__(self, columns, rows):
        self._columns = list(columns)
        self._rows = list(rows)
        self.fetch_calls = 0

    def store_result(self) -> int:
        return len(self._rows)

    def describe_columns(self):
        return list(self._columns)

    def fetch_next(self):
        self.fetch_calls += 1
        if not self._rows:
            return None
        return self._rows.pop(0)


class StatementKindTests(unittest.TestCase):
    def test_classify_is_case_insensitive_and_whitespace_tolerant(self) -> None:
        self.assertIs(classify("   SELECT 1"), StatementKind.SELECT)
        self.assertIs(classify("Insert into t (a) values (?)"), StatementKind.INSERT)
        self.assertIs(classify("\n\tupdate t set a = 1"), StatementKind.UPDATE)
        self.assertIs(classify("DELETE FROM t"), StatementKind.DELETE)
        self.assertIs(classify("show tables"), StatementKind.SHOW)

    def test_other_verbs(self) -> None:
        self.assertIs(classify("CREATE TABLE t (id INTEGER)"), StatementKind.OTHER)
        self.assertIs(classify("WITH x AS (SELECT 1) SELECT * FROM x"), StatementKind.OTHER)
        self.assertIs(classify("/* note */ SELECT 1"), StatementKind.OTHER)
        self.assertIs(classify(""), StatementKind.OTHER)

    def test_leading_verb(self) -> None:
        self.assertEqual(leading_verb("  SeLeCt a FROM t"), "select")
        self.assertEqual(leading_verb("   "), "")

    def test_read_flag(self) -> None:
        self.assertTrue(StatementKind.SHOW.is_read)
        self.assertTrue(StatementKind.SELECT.is_read)
        self.assertFalse(StatementKind.DELETE.is_read)
        self.assertFalse(StatementKind.OTHER.is_read)


class ResolveColumnNamesTests(unittest.TestCase):
    def test_duplicate_columns_get_numeric_suffixes(self) -> None:
        self.assertEqual(resolve_column_names(["id", "name", "id"]), ["id", "name", "id_2"])
        self.assertEqual(
            resolve_column_names(["id", "id", "id", "name"]),
            ["id", "id_2", "id_3", "name"],
        )

    def test_suffix_skips_names_already_taken(self) -> None:
        self.assertEqual(
            resolve_column_names(["id", "id_2", "id"]), ["id", "id_2", "id_3"]
        )

    def test_too_many_duplicates_is_fatal(self) -> None:
        names = ["id"] * (MAX_DUPLICATE_SUFFIX - 1)
        resolved = resolve_column_names(names)
        self.assertEqual(resolved[-1], f"id_{MAX_DUPLICATE_SUFFIX - 1}")

        with self.assertRaises(DuplicateColumnOverflow):
            resolve_column_names(["id"] * MAX_DUPLICATE_SUFFIX)


class MaterializeTests(unittest.TestCase):
    def test_rows_follow_column_order_and_are_unescaped(self) -> None:
        statement = _BufferedStatement(
            ["id", "name", "id"],
            [(1, "O\\'Reilly", 10), (2, "plain", 20)],
        )

        rows = materialize(statement)

        self.assertEqual([list(row) for row in rows], [["id", "name", "id_2"]] * 2)
        self.assertEqual(dict(rows[0]), {"id": 1, "name": "O'Reilly", "id_2": 10})
        self.assertEqual(dict(rows[1]), {"id": 2, "name": "plain", "id_2": 20})

    def test_empty_result_is_empty_list(self) -> None:
        statement = _BufferedStatement(["id"], [])
        self.assertEqual(materialize(statement), [])
        self.assertEqual(statement.fetch_calls, 0)

    def test_rows_are_read_only(self) -> None:
        row = build_row(["a"], (1,))
        with self.assertRaises(TypeError):
            row["a"] = 2  # type: ignore[index]

    def test_rows_do_not_alias_the_fetch_buffer(self) -> None:
        buffer = [bytearray(b"xy")]
        row = build_row(["blob"], buffer)
        buffer[0][0] = ord("z")
        self.assertEqual(row["blob"], b"xy")

    def test_buffer_shape_mismatch_raises_bind_result_error(self) -> None:
        statement = _BufferedStatement(["a", "b"], [(1, 2), (3,)])
        with self.assertRaises(BindResultError):
            materialize(statement)


if __name__ == "__main__":
    unittest.main()
