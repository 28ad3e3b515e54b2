"""SQLite adapter for the document and excerpt content store."""

import hashlib
import json
import logging
import sqlite3
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from ...core.domain import Document, Excerpt, ExcerptMatch
from ...core.domain.exceptions import ContentStoreConnectionError, ContentStoreQueryError
from ...core.ports.content_store_port import ContentStorePort

logger = logging.getLogger(__name__)

DOCUMENT_COLUMNS = (
    "id, title, url, description, category, content_type, source, "
    "publish_date, is_active, content_hash"
)

# Fields matched by keyword search
SEARCHABLE_FIELDS = ("title", "description", "category")


def _like_pattern(term: str) -> str:
    """Wrap ``term`` for a case-insensitive LIKE with wildcards escaped."""
    escaped = term.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _py_lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def _parse_keywords(raw: str | None, excerpt_id: str) -> list[str]:
    try:
        keywords = json.loads(raw or "[]")
    except ValueError:
        keywords = None
    if not isinstance(keywords, list):
        logger.warning("Ignoring unreadable keywords on excerpt %s", excerpt_id)
        return []
    return [str(k) for k in keywords]


def compute_content_hash(document: Document) -> str:
    """Stable hash of every stored field of ``document`` except its id and status."""
    fields = (
        document.title,
        document.url,
        document.description,
        document.category,
        document.content_type,
        document.source,
        document.publish_date,
    )
    payload = "\x1f".join(value or "" for value in fields)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class SQLiteContentStore(ContentStorePort):
    """Content store backed by a local SQLite database.

    Search methods are read-only. ``upsert_document``, ``add_excerpt`` and
    ``deactivate_document`` exist for ingestion (the ``seed`` CLI command and
    tests).
    """

    def __init__(self, db_path: str | Path = "data/mofped.db") -> None:
        """Initialize the store, creating the schema if needed.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = Path(db_path)
        self._ensure_db_dir()
        self._init_db()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection that commits on success and is always closed."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        # SQLite's lower() only folds ASCII
        conn.create_function("py_lower", 1, _py_lower, deterministic=True)
        try:
            conn.execute("PRAGMA foreign_keys = ON")
            with conn:
                yield conn
        finally:
            conn.close()

    def _init_db(self) -> None:
        """Initialize the database schema."""
        try:
            with self._connect() as conn:
                cursor = conn.cursor()

                cursor.execute("""
                    CREATE TABLE IF NOT EXISTS documents (
                        id TEXT PRIMARY KEY,
                        title TEXT NOT NULL,
                        url TEXT NOT NULL UNIQUE,
                        description TEXT,
                        category TEXT,
                        content_type TEXT NOT NULL DEFAULT 'html',
                        source TEXT,
                        publish_date TEXT,
                        is_active INTEGER NOT NULL DEFAULT 1,
                        content_hash TEXT,
                        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                    )
                """)

                cursor.execute("""
                    CREATE TABLE IF NOT EXISTS excerpts (
                        id TEXT PRIMARY KEY,
                        document_id TEXT NOT NULL REFERENCES documents(id) ON DELETE CASCADE,
                        excerpt TEXT NOT NULL,
                        keywords TEXT NOT NULL DEFAULT '[]',
                        embedding TEXT,
                        relevance REAL NOT NULL DEFAULT 1.0,
                        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                    )
                """)

                cursor.execute("""
                    CREATE INDEX IF NOT EXISTS idx_documents_category
                    ON documents(category)
                """)

                cursor.execute("""
                    CREATE INDEX IF NOT EXISTS idx_documents_publish_date
                    ON documents(publish_date)
                """)

                cursor.execute("""
                    CREATE INDEX IF NOT EXISTS idx_excerpts_document
                    ON excerpts(document_id)
                """)

                cursor.execute("""
                    CREATE INDEX IF NOT EXISTS idx_excerpts_relevance
                    ON excerpts(relevance)
                """)

                conn.commit()

        except sqlite3.Error as e:
            logger.error(f"Failed to initialize content store: {e}")
            raise ContentStoreConnectionError(
                "Failed to initialize content store",
                cause=e,
                context={"db_path": str(self.db_path)},
            ) from e

    @staticmethod
    def _row_to_document(row: sqlite3.Row, prefix: str = "") -> Document:
        return Document(
            id=row[f"{prefix}id"],
            title=row[f"{prefix}title"],
            url=row[f"{prefix}url"],
            description=row[f"{prefix}description"],
            category=row[f"{prefix}category"],
            content_type=row[f"{prefix}content_type"],
            source=row[f"{prefix}source"],
            publish_date=row[f"{prefix}publish_date"],
            is_active=bool(row[f"{prefix}is_active"]),
            content_hash=row[f"{prefix}content_hash"],
        )

    # ------------------------------------------------------------------
    # Query-time reads
    # ------------------------------------------------------------------

    def search_documents(self, terms: list[str], limit: int) -> list[Document]:
        """Active documents whose title, description or category contains any term."""
        terms = [t for t in terms if t]
        if not terms or limit <= 0:
            return []

        clauses = []
        params: list[Any] = []
        for term in terms:
            pattern = _like_pattern(term)
            for column in SEARCHABLE_FIELDS:
                clauses.append(f"py_lower(coalesce({column}, '')) LIKE ? ESCAPE '\\'")
                params.append(pattern)

        sql = f"""
            SELECT {DOCUMENT_COLUMNS}
            FROM documents
            WHERE is_active = 1 AND ({" OR ".join(clauses)})
            ORDER BY publish_date IS NULL, publish_date DESC
            LIMIT ?
        """
        params.append(limit)

        try:
            with self._connect() as conn:
                rows = conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise ContentStoreQueryError(
                "Document search failed", cause=e, context={"terms": terms}
            ) from e

        return [self._row_to_document(row) for row in rows]

    def search_excerpts(self, query: str, limit: int) -> list[ExcerptMatch]:
        """Excerpts matching ``query`` by text or keyword, joined to active documents.

        Embeddings are not loaded; matches carry ``embedding=None``. A row with
        unreadable keywords still matches on its text.
        """
        if not query or limit <= 0:
            return []

        sql = """
            SELECT
                e.id AS e_id, e.document_id AS e_document_id, e.excerpt AS e_excerpt,
                e.keywords AS e_keywords, e.relevance AS e_relevance,
                d.id AS d_id, d.title AS d_title, d.url AS d_url,
                d.description AS d_description, d.category AS d_category,
                d.content_type AS d_content_type, d.source AS d_source,
                d.publish_date AS d_publish_date, d.is_active AS d_is_active,
                d.content_hash AS d_content_hash
            FROM excerpts e
            JOIN documents d ON d.id = e.document_id
            WHERE d.is_active = 1
              AND (
                py_lower(e.excerpt) LIKE ? ESCAPE '\\'
                OR EXISTS (
                    SELECT 1
                    FROM json_each(CASE WHEN json_valid(e.keywords) THEN e.keywords ELSE '[]' END) k
                    WHERE py_lower(k.value) = ?
                )
              )
            ORDER BY e.relevance DESC
            LIMIT ?
        """
        params = (_like_pattern(query), query.lower(), limit)

        try:
            with self._connect() as conn:
                rows = conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise ContentStoreQueryError(
                "Excerpt search failed", cause=e, context={"query": query}
            ) from e

        matches = []
        for row in rows:
            excerpt = Excerpt(
                id=row["e_id"],
                document_id=row["e_document_id"],
                excerpt=row["e_excerpt"],
                keywords=_parse_keywords(row["e_keywords"], row["e_id"]),
                relevance=row["e_relevance"],
            )
            matches.append(ExcerptMatch(excerpt=excerpt, document=self._row_to_document(row, "d_")))
        return matches

    def get_document(self, document_id: str) -> Document | None:
        """Fetch a single document by id."""
        try:
            with self._connect() as conn:
                row = conn.execute(
                    f"SELECT {DOCUMENT_COLUMNS} FROM documents WHERE id = ?", (document_id,)
                ).fetchone()
        except sqlite3.Error as e:
            raise ContentStoreQueryError(
                "Document lookup failed", cause=e, context={"document_id": document_id}
            ) from e
        return self._row_to_document(row) if row else None

    def get_stats(self) -> dict[str, Any]:
        """Document and excerpt counts."""
        try:
            with self._connect() as conn:
                documents, active = conn.execute(
                    "SELECT count(*), coalesce(sum(is_active), 0) FROM documents"
                ).fetchone()
                excerpts = conn.execute("SELECT count(*) FROM excerpts").fetchone()[0]
        except sqlite3.Error as e:
            raise ContentStoreQueryError("Failed to read store statistics", cause=e) from e
        return {"documents": documents, "active_documents": active, "excerpts": excerpts}

    # ------------------------------------------------------------------
    # Ingestion-side writes
    # ------------------------------------------------------------------

    def upsert_document(self, document: Document) -> tuple[str, str]:
        """Insert or update a document keyed by url.

        Args:
            document: Document to store. ``id`` is kept for new rows; an
                existing row keeps its original id.

        Returns:
            Tuple of (document id, status) where status is ``inserted``,
            ``updated`` or ``unchanged``.
        """
        content_hash = compute_content_hash(document)
        try:
            with self._connect() as conn:
                existing = conn.execute(
                    "SELECT id, content_hash, is_active FROM documents WHERE url = ?",
                    (document.url,),
                ).fetchone()

                if existing is None:
                    doc_id = document.id or str(uuid.uuid4())
                    conn.execute(
                        f"""
                        INSERT INTO documents ({DOCUMENT_COLUMNS})
                        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                        """,
                        (
                            doc_id,
                            document.title,
                            document.url,
                            document.description,
                            document.category,
                            document.content_type,
                            document.source,
                            document.publish_date,
                            int(document.is_active),
                            content_hash,
                        ),
                    )
                    conn.commit()
                    return doc_id, "inserted"

                doc_id = existing["id"]
                same_hash = existing["content_hash"] == content_hash
                if same_hash and bool(existing["is_active"]) == document.is_active:
                    return doc_id, "unchanged"

                conn.execute(
                    """
                    UPDATE documents
                    SET title = ?, description = ?, category = ?, content_type = ?,
                        source = ?, publish_date = ?, is_active = ?, content_hash = ?,
                        updated_at = CURRENT_TIMESTAMP
                    WHERE id = ?
                    """,
                    (
                        document.title,
                        document.description,
                        document.category,
                        document.content_type,
                        document.source,
                        document.publish_date,
                        int(document.is_active),
                        content_hash,
                        doc_id,
                    ),
                )
                conn.commit()
                return doc_id, "updated"
        except sqlite3.Error as e:
            raise ContentStoreQueryError(
                "Failed to upsert document", cause=e, context={"url": document.url}
            ) from e

    def add_excerpt(self, excerpt: Excerpt) -> str:
        """Insert an excerpt for an existing document.

        Returns:
            The excerpt id.
        """
        excerpt_id = excerpt.id or str(uuid.uuid4())
        keywords = sorted({k.lower() for k in excerpt.keywords if k})
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO excerpts (id, document_id, excerpt, keywords, embedding, relevance)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        excerpt_id,
                        excerpt.document_id,
                        excerpt.excerpt,
                        json.dumps(keywords),
                        json.dumps(excerpt.embedding) if excerpt.embedding is not None else None,
                        excerpt.relevance,
                    ),
                )
                conn.commit()
        except sqlite3.Error as e:
            raise ContentStoreQueryError(
                "Failed to add excerpt",
                cause=e,
                context={"document_id": excerpt.document_id},
            ) from e
        return excerpt_id

    def clear_excerpts(self, document_id: str) -> int:
        """Delete all excerpts of a document. Returns the number removed."""
        try:
            with self._connect() as conn:
                cursor = conn.execute("DELETE FROM excerpts WHERE document_id = ?", (document_id,))
                conn.commit()
                return cursor.rowcount
        except sqlite3.Error as e:
            raise ContentStoreQueryError(
                "Failed to clear excerpts", cause=e, context={"document_id": document_id}
            ) from e

    def deactivate_document(self, url: str) -> bool:
        """Soft-delete a document by url. Returns True if a row changed."""
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    """
                    UPDATE documents SET is_active = 0, updated_at = CURRENT_TIMESTAMP
                    WHERE url = ? AND is_active = 1
                    """,
                    (url,),
                )
                conn.commit()
                return cursor.rowcount > 0
        except sqlite3.Error as e:
            raise ContentStoreQueryError(
                "Failed to deactivate document", cause=e, context={"url": url}
            ) from e
