"""
Quick helper to run a query against the configured database (DATABASE_URL required).

Usage:
  DATABASE_URL=... python scripts/db_shell.py                          # list tables
  DATABASE_URL=... python scripts/db_shell.py "SELECT * FROM users"    # run a custom query
"""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from core.db.base import dialect_for, get_conn, resolve_database_url  # noqa: E402

_LIST_TABLES = {
    "postgres": "SELECT tablename AS name FROM pg_tables WHERE schemaname='public' ORDER BY tablename",
    "sqlite": "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name",
}


def main() -> None:
    dialect = dialect_for(resolve_database_url())
    query = " ".join(sys.argv[1:]).strip() or _LIST_TABLES[dialect]

    print(f"Using DB: {dialect} (DATABASE_URL)", file=sys.stderr)

    conn = get_conn()
    try:
        cur = conn.cursor()
        cur.execute(query)
        rows = cur.fetchall() if cur.description is not None else None
        conn.commit()
        if rows is not None:
            for row in rows:
                print(row)
        else:
            print(f"OK ({cur.rowcount} row(s) affected)")
    except Exception as exc:
        raise SystemExit(f"Error running query: {exc}") from exc
    finally:
        conn.close()


if __name__ == "__main__":
    main()
