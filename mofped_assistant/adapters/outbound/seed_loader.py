"""Loads documents and their curated excerpts from a JSON seed file."""

import json
import logging
import re
import uuid
from collections import Counter
from pathlib import Path
from urllib.parse import urlparse

from ...config.settings import PACKAGE_DATA_DIR
from ...core.domain import Document, Excerpt
from ...core.domain.exceptions import InvalidConfigurationError
from .sqlite_content_store import SQLiteContentStore

logger = logging.getLogger(__name__)

DEFAULT_SEED_PATH = PACKAGE_DATA_DIR / "sample_documents.json"

# Leading excerpt words indexed as keywords when the file gives none.
EXCERPT_KEYWORD_WORDS = 5

_PUNCTUATION = re.compile(r"[^\w/-]+")


def default_keywords(excerpt: str, category: str | None) -> list[str]:
    """Category plus the first few words of the excerpt."""
    words = [_PUNCTUATION.sub("", w) for w in excerpt.lower().split()[:EXCERPT_KEYWORD_WORDS]]
    keywords = [category.lower()] if category else []
    return keywords + [w for w in words if w]


def read_seed_file(path: Path) -> list[dict]:
    """Read the ``documents`` array of a seed file.

    Raises:
        InvalidConfigurationError: If the file is missing or malformed.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        documents = data["documents"]
    except (OSError, json.JSONDecodeError, KeyError, TypeError) as e:
        raise InvalidConfigurationError(
            "Could not read seed file", cause=e, context={"path": str(path)}
        ) from e

    if not isinstance(documents, list):
        raise InvalidConfigurationError(
            "Seed file 'documents' must be a list", context={"path": str(path)}
        )
    return documents


def seed_store(store: SQLiteContentStore, path: Path = DEFAULT_SEED_PATH) -> Counter:
    """Upsert every document in ``path`` and replace excerpts of changed ones.

    Returns:
        Counter of upsert statuses (``inserted``, ``updated``, ``unchanged``)
        plus ``excerpts`` written.
    """
    stats: Counter = Counter()

    for entry in read_seed_file(path):
        url = entry["url"]
        document = Document(
            id=entry.get("id") or str(uuid.uuid4()),
            title=entry["title"],
            url=url,
            description=entry.get("description"),
            category=entry.get("category"),
            content_type=entry.get("content_type", "html"),
            source=entry.get("source") or urlparse(url).hostname,
            publish_date=entry.get("publish_date"),
            is_active=entry.get("is_active", True),
        )
        doc_id, status = store.upsert_document(document)
        stats[status] += 1

        if status == "unchanged":
            continue

        store.clear_excerpts(doc_id)
        for i, item in enumerate(entry.get("excerpts", [])):
            text = item["excerpt"]
            store.add_excerpt(
                Excerpt(
                    id=str(uuid.uuid4()),
                    document_id=doc_id,
                    excerpt=text,
                    keywords=item.get("keywords") or default_keywords(text, document.category),
                    relevance=item.get("relevance", round(1.0 - i * 0.1, 2)),
                )
            )
            stats["excerpts"] += 1

    logger.info("Seeded %s from %s", dict(stats), path)
    return stats
