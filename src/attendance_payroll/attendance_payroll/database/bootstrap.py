"""Apply ``database/schema.sql`` against the configured MySQL server."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List

import mysql.connector

from ..common.logger import get_logger
from .connection import DBConfig, DatabaseConnection

logger = get_logger(__name__)

_CREATE_DB_OR_USE = re.compile(r"(?im)^\s*(CREATE\s+DATABASE\b|USE\b).*?;\s*$")
_LINE_COMMENT = re.compile(r"(?m)^\s*--.*$")


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a schema file into statements.

    ``CREATE DATABASE`` / ``USE`` lines are dropped so the file works for any
    configured database name. Schema files carry no ``;`` inside literals.
    """
    sql = _LINE_COMMENT.sub("", _CREATE_DB_OR_USE.sub("", sql))
    for stmt in sql.split(";"):
        stmt = stmt.strip()
        if stmt:
            yield stmt


def ensure_database_exists(config: DBConfig) -> None:
    conn = mysql.connector.connect(
        host=config.host,
        port=config.port,
        user=config.user,
        password=config.password,
    )
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path) -> List[str]:
    """Run every statement of the schema file; returns the statements executed."""
    ensure_database_exists(conn_factory.config)
    statements = list(iter_sql_statements(Path(schema_path).read_text(encoding="utf-8")))

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()

    logger.info("Schema applied to %s (%d statements)", conn_factory.config.database, len(statements))
    return statements
