"""
Pytest configuration and shared fixtures.
"""

from pathlib import Path

import pytest

from mofped_assistant.adapters.outbound.seed_loader import DEFAULT_SEED_PATH, seed_store
from mofped_assistant.adapters.outbound.sqlite_content_store import SQLiteContentStore
from mofped_assistant.config.external_systems import load_external_systems
from mofped_assistant.config.settings import PACKAGE_DATA_DIR
from mofped_assistant.core.domain import Document, DocumentResult, Excerpt


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (HTTP app, mocked services)")
    config.addinivalue_line("markers", "slow: Slow tests (timeouts, network)")


@pytest.fixture
def store(tmp_path: Path) -> SQLiteContentStore:
    """Empty content store in a temporary directory."""
    return SQLiteContentStore(tmp_path / "test.db")


@pytest.fixture
def seeded_store(store: SQLiteContentStore) -> SQLiteContentStore:
    """Content store loaded with the bundled sample documents."""
    seed_store(store, DEFAULT_SEED_PATH)
    return store


@pytest.fixture(scope="session")
def catalog():
    """The bundled external-systems table."""
    return load_external_systems(PACKAGE_DATA_DIR / "external_systems.json")


@pytest.fixture
def add_document(store: SQLiteContentStore):
    """Insert a document (and optional excerpts) and return its id."""

    def _add(
        title: str,
        url: str,
        description: str | None = None,
        category: str | None = None,
        publish_date: str | None = None,
        is_active: bool = True,
        excerpts: list[tuple[str, float]] | None = None,
        keywords: list[str] | None = None,
    ) -> str:
        doc_id, _ = store.upsert_document(
            Document(
                id="",
                title=title,
                url=url,
                description=description,
                category=category,
                publish_date=publish_date,
                is_active=is_active,
            )
        )
        for text, relevance in excerpts or []:
            store.add_excerpt(
                Excerpt(
                    id="",
                    document_id=doc_id,
                    excerpt=text,
                    keywords=keywords or [],
                    relevance=relevance,
                )
            )
        return doc_id

    return _add


@pytest.fixture
def make_result():
    """Build a DocumentResult for synthesizer and router tests."""

    def _make(
        title: str,
        category: str | None = "Budget",
        description: str | None = "A description",
        relevance: float = 0.5,
    ) -> DocumentResult:
        slug = title.lower().replace(" ", "-")
        return DocumentResult(
            document_id=slug,
            title=title,
            url=f"https://finance.go.ug/{slug}",
            description=description,
            category=category,
            content_type="pdf",
            publish_date="2024-06-15",
            relevance=relevance,
        )

    return _make
