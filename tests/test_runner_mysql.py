from __future__ import annotations

import importlib
import os
import unittest
from typing import Any

from mini_stmt import Batch, ErrorKind, InsertId, MySQLDialect, QueryRunner, Rows


def _load_mysql_driver() -> tuple[str, Any] | tuple[None, None]:
    for module_name in ("pymysql", "MySQLdb"):
        try:
            module = importlib.import_module(module_name)
        except ImportError:
            continue
        connect = getattr(module, "connect", None)
        if connect is not None:
            return module_name, connect
    return None, None


MYSQL_DRIVER, MYSQL_CONNECT = _load_mysql_driver()
HAS_MYSQL_DRIVER = MYSQL_CONNECT is not None


def _mysql_connect(
    *,
    driver_name: str,
    host: str,
    port: int,
    user: str,
    password: str,
    database: str,
) -> Any:
    if driver_name == "MySQLdb":
        return MYSQL_CONNECT(  # type: ignore[misc]
            host=host,
            port=port,
            user=user,
            passwd=password,
            db=database,
            charset="utf8mb4",
        )
    return MYSQL_CONNECT(  # type: ignore[misc]
        host=host,
        port=port,
        user=user,
        password=password,
        database=database,
        charset="utf8mb4",
    )


@unittest.skipUnless(HAS_MYSQL_DRIVER, "mysql driver is not installed")
class QueryRunnerMySQLTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.host = os.getenv("MINI_STMT_MYSQL_HOST", os.getenv("MYSQL_HOST", "localhost"))
        cls.port = int(os.getenv("MINI_STMT_MYSQL_PORT", os.getenv("MYSQL_PORT", "3306")))
        cls.user = os.getenv("MINI_STMT_MYSQL_USER", os.getenv("MYSQL_USER", "root"))
        cls.password = os.getenv(
            "MINI_STMT_MYSQL_PASSWORD",
            os.getenv("MYSQL_ROOT_PASSWORD", os.getenv("MYSQL_PASSWORD", "password")),
        )
        cls.database = os.getenv(
            "MINI_STMT_MYSQL_DATABASE",
            os.getenv("MYSQL_DATABASE", "mini_stmt_test"),
        )
        bootstrap_db = os.getenv("MINI_STMT_MYSQL_BOOTSTRAP_DB", "mysql")

        try:
            bootstrap_conn = _mysql_connect(
                driver_name=MYSQL_DRIVER,  # type: ignore[arg-type]
                host=cls.host,
                port=cls.port,
                user=cls.user,
                password=cls.password,
                database=bootstrap_db,
            )
            cur = bootstrap_conn.cursor()
            cur.execute(f"CREATE DATABASE IF NOT EXISTS `{cls.database}`;")
            bootstrap_conn.commit()
            cur.close()
            bootstrap_conn.close()

            cls.conn = _mysql_connect(
                driver_name=MYSQL_DRIVER,  # type: ignore[arg-type]
                host=cls.host,
                port=cls.port,
                user=cls.user,
                password=cls.password,
                database=cls.database,
            )
        except Exception as exc:
            raise unittest.SkipTest(
                f"MySQL is not reachable at {cls.host}:{cls.port} "
                f"with configured credentials: {exc}"
            ) from exc

        cls.runner = QueryRunner.from_connection(cls.conn, MySQLDialect())

    @classmethod
    def tearDownClass(cls) -> None:
        runner = getattr(cls, "runner", None)
        if runner is not None:
            runner.close()

    def setUp(self) -> None:
        self.runner.query("DROP TABLE IF EXISTS `test_tbl_002`")
        self.runner.query("DROP TABLE IF EXISTS `test_tbl_001`")
        self.runner.query(
            "CREATE TABLE `test_tbl_001` ("
            "`id` INT AUTO_INCREMENT PRIMARY KEY, "
            "`fld_title` VARCHAR(255), `fld_body` TEXT)"
        )
        self.runner.query(
            "CREATE TABLE `test_tbl_002` ("
            "`id` INT AUTO_INCREMENT PRIMARY KEY, `tbl_001_id` INT, "
            "`fld_title` VARCHAR(255), `fld_body` TEXT)"
        )

    def test_insert_select_update_delete(self) -> None:
        inserted = self.runner.query(
            "INSERT INTO test_tbl_001(fld_title, fld_body) VALUES(%s,%s)",
            ("st", "Testing", "<p>I am just testing.</p>"),
        )
        self.assertIsInstance(inserted, InsertId)
        self.assertGreater(inserted.value, 0)

        selected = self.runner.query("SELECT * FROM test_tbl_001 WHERE id = %s", ("i", inserted.value))
        self.assertIsInstance(selected, Rows)
        self.assertEqual(selected.value[0]["fld_body"], "<p>I am just testing.</p>")

        updated = self.runner.query(
            "UPDATE test_tbl_001 SET fld_body = %s WHERE id = %s", ("ti", "<p>Body updated.</p>", inserted.value)
        )
        self.assertEqual(updated.value, 1)

        deleted = self.runner.query("DELETE FROM test_tbl_001 WHERE id = %s", ("i", inserted.value))
        self.assertEqual(deleted.value, 1)

    def test_batch_insert_and_join(self) -> None:
        parent = self.runner.query(
            "INSERT INTO test_tbl_001(fld_title, fld_body) VALUES(%s,%s)", ("ss", "Main", "body")
        ).value
        rows = [(parent, f"Testing sub {n}", f"<p>sub {n}</p>") for n in range(1, 7)]

        batch = self.runner.query(
            "INSERT INTO test_tbl_002(tbl_001_id, fld_title, fld_body) VALUES(%s,%s,%s)",
            ("ist", rows),
            True,
        )
        self.assertIsInstance(batch, Batch)
        self.assertTrue(batch.ok)
        self.assertEqual(len(batch), 6)

        joined = self.runner.query(
            "SELECT main.*, sub.* FROM test_tbl_001 AS main "
            "INNER JOIN test_tbl_002 AS sub ON main.id = sub.tbl_001_id"
        ).value
        self.assertEqual(len(joined), 6)
        self.assertIn("id_2", joined[0])
        self.assertIn("fld_title_2", joined[0])

    def test_show_tables_and_columns(self) -> None:
        tables = self.runner.show_tables()
        self.assertIn("test_tbl_001", tables)
        self.assertEqual(
            self.runner.show_columns_from("test_tbl_001"), ["id", "fld_title", "fld_body"]
        )

    def test_unknown_table_is_prepare_error(self) -> None:
        outcome = self.runner.query("SELECT * FROM no_such_table WHERE id = %s", ("i", 1))
        self.assertEqual(outcome.kind, ErrorKind.PREPARE_ERROR)


if __name__ == "__main__":
    unittest.main()
