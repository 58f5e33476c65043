"""Startup helpers: create the database, apply schema.sql, seed an admin."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Iterator

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.enums import AccountStatus, Role

logger = logging.getLogger(__name__)


def _connect(db_config: dict, *, with_database: bool = True):
    kwargs = {
        "host": str(db_config.get("host", "localhost")),
        "port": int(db_config.get("port", 3306)),
        "user": str(db_config.get("user", "root")),
        "password": str(db_config.get("password", "")),
        "use_pure": True,
    }
    if with_database:
        kwargs["database"] = str(db_config.get("database", "courier_hrms"))
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql may carry its own CREATE DATABASE / USE; the configured name wins.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    return re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)


def split_sql(sql: str) -> Iterator[str]:
    """Split a script on ';' outside of quoted strings."""
    buf: list[str] = []
    quote = ""
    escaped = False
    for ch in sql:
        buf.append(ch)
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif quote:
            if ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt
    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    name = str(db_config.get("database", "courier_hrms"))
    conn = _connect(db_config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        for stmt in split_sql(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_demo_admin(db_config: dict) -> None:
    """Create or refresh the bootstrap admin account (mobile/password from env)."""
    mobile = os.getenv("ADMIN_MOBILE", "9999999999")
    password = os.getenv("ADMIN_PASSWORD", "admin123")

    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        cur.execute(
            """
            INSERT INTO users(full_name, mobile, role, status, employee_id, password_hash,
                              is_account_activated, is_approved, is_profile_completed)
            VALUES(%s,%s,%s,%s,%s,%s,1,1,1)
            ON DUPLICATE KEY UPDATE password_hash=VALUES(password_hash), role=VALUES(role), status=VALUES(status)
            """,
            (
                "Admin",
                mobile,
                Role.ADMIN.value,
                AccountStatus.ACTIVE.value,
                "ADMIN001",
                generate_password_hash(password),
            ),
        )
        conn.commit()
        logger.info("Admin account %s ready", mobile)
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
