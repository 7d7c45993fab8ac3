from __future__ import annotations
import json
import sqlite3
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from supabase import Client, create_client

from irecruit_core.config.settings import AppConfig, get_app_config


def get_supabase(cfg: Optional[AppConfig] = None) -> Client:
    """Return a configured Supabase client using environment variables."""
    cfg = cfg or get_app_config()
    if not cfg.supabase_url or not cfg.supabase_key:
        raise RuntimeError("Missing SUPABASE_URL or SUPABASE_KEY in environment/.env")
    return create_client(cfg.supabase_url, cfg.supabase_key)


# SQLite helpers
def _casefold(value: Any) -> Any:
    return value.casefold() if isinstance(value, str) else value


def get_sqlite(db_path: str | Path = "irecruit.db") -> sqlite3.Connection:
    p = Path(db_path)
    if str(db_path) != ":memory:" and p.parent and not p.parent.exists():
        p.parent.mkdir(parents=True, exist_ok=True)
    # partagée entre les threads du serveur; l'adapter sérialise les accès
    conn = sqlite3.connect(str(p), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.create_function("casefold", 1, _casefold, deterministic=True)
    return conn


def ensure_sqlite_documents_schema(conn: sqlite3.Connection):
    cur = conn.cursor()
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS documents (
            collection TEXT NOT NULL,
            id TEXT NOT NULL,
            body TEXT NOT NULL,
            created_at TEXT DEFAULT (datetime('now')),
            updated_at TEXT DEFAULT (datetime('now')),
            PRIMARY KEY (collection, id)
        );
        """
    )
    cur.execute(
        """
        CREATE INDEX IF NOT EXISTS documents_collection_idx ON documents(collection);
        """
    )
    conn.commit()


def upsert_document(conn: sqlite3.Connection, collection: str, doc: Dict[str, Any]) -> Dict[str, Any]:
    doc_id = doc.get("_id")
    if not doc_id:
        raise ValueError("document without _id")
    conn.execute(
        """
        INSERT INTO documents (collection, id, body, created_at, updated_at)
        VALUES (?, ?, ?, datetime('now'), datetime('now'))
        ON CONFLICT(collection, id) DO UPDATE SET
            body=excluded.body,
            updated_at=datetime('now');
        """,
        (collection, str(doc_id), json.dumps(doc, ensure_ascii=False)),
    )
    conn.commit()
    return doc


def get_document(conn: sqlite3.Connection, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
    row = conn.execute(
        "SELECT body FROM documents WHERE collection = ? AND id = ?",
        (collection, str(doc_id)),
    ).fetchone()
    return json.loads(row["body"]) if row else None


def delete_document(conn: sqlite3.Connection, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
    doc = get_document(conn, collection, doc_id)
    if doc is None:
        return None
    conn.execute("DELETE FROM documents WHERE collection = ? AND id = ?", (collection, str(doc_id)))
    conn.commit()
    return doc


def _where(collection: str, clauses: Sequence[Tuple[str, Sequence[Any]]]) -> Tuple[str, List[Any]]:
    sql = ["collection = ?"]
    params: List[Any] = [collection]
    for clause, values in clauses:
        sql.append(f"({clause})")
        params.extend(values)
    return " AND ".join(sql), params


def find_documents(
    conn: sqlite3.Connection,
    collection: str,
    clauses: Sequence[Tuple[str, Sequence[Any]]] = (),
    order_by: Optional[str] = None,
    limit: Optional[int] = None,
    offset: int = 0,
) -> List[Dict[str, Any]]:
    """SELECT sur une collection.

    `clauses`: fragments SQL avec leurs paramètres, combinés par AND, ex.
    ("json_extract(body, '$.tranche') = ?", [tranche_id]).
    """
    where, params = _where(collection, clauses)
    sql = f"SELECT body FROM documents WHERE {where}"
    sql += f" ORDER BY {order_by}" if order_by else " ORDER BY rowid"
    if limit is not None:
        sql += " LIMIT ? OFFSET ?"
        params.extend([int(limit), int(offset)])
    rows = conn.execute(sql, params).fetchall()
    return [json.loads(r["body"]) for r in rows]


def count_documents(conn: sqlite3.Connection, collection: str, clauses: Sequence[Tuple[str, Sequence[Any]]] = ()) -> int:
    where, params = _where(collection, clauses)
    row = conn.execute(f"SELECT COUNT(*) AS n FROM documents WHERE {where}", params).fetchone()
    return int(row["n"]) if row else 0


def in_clause(field: str, values: Iterable[Any]) -> Tuple[str, List[Any]]:
    vals = [str(v) for v in values]
    if not vals:
        return "0", []
    marks = ", ".join("?" for _ in vals)
    return f"json_extract(body, '$.{field}') IN ({marks})", vals


def multilingual_contains(field: str, needle: str) -> Tuple[str, List[Any]]:
    # correspondance partielle insensible à la casse sur fr/en/ar
    n = needle.casefold()
    parts = [f"instr(casefold(json_extract(body, '$.{field}.{loc}')), ?) > 0" for loc in ("fr", "en", "ar")]
    return " OR ".join(parts), [n, n, n]
