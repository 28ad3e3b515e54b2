"""Unit tests for the mofped CLI."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from mofped_assistant.adapters.inbound.cli.commands import app
from mofped_assistant.core.domain import GuardrailStatus, Intent, Response, SourceRef
from mofped_assistant.core.domain.exceptions import ContentStoreConnectionError

pytestmark = pytest.mark.unit

runner = CliRunner()


def test_seed_then_status(store):
    with patch("mofped_assistant.composition.container.get_content_store", return_value=store):
        seeded = runner.invoke(app, ["seed"])
        status = runner.invoke(app, ["status"])

    assert seeded.exit_code == 0
    assert "inserted" in seeded.output
    assert store.get_stats()["active_documents"] == 10

    assert status.exit_code == 0
    assert "active" in status.output


def test_status_reports_empty_store(store):
    with patch("mofped_assistant.composition.container.get_content_store", return_value=store):
        result = runner.invoke(app, ["status"])

    assert result.exit_code == 0
    assert "mofped seed" in result.output


def test_status_store_failure_exits_nonzero():
    broken = MagicMock()
    broken.get_stats.side_effect = ContentStoreConnectionError("Cannot open database")

    with patch("mofped_assistant.composition.container.get_content_store", return_value=broken):
        result = runner.invoke(app, ["status"])

    assert result.exit_code == 1
    assert "MOF_STO_002" in result.output


def test_seed_with_missing_file(store, tmp_path):
    with patch("mofped_assistant.composition.container.get_content_store", return_value=store):
        result = runner.invoke(app, ["seed", str(tmp_path / "missing.json")])

    assert result.exit_code == 1
    assert "MOF_CFG_002" in result.output


def test_ask_renders_answer_and_sources():
    router = MagicMock()
    router.handle = AsyncMock(
        return_value=Response(
            summary="I found 1 relevant document on finance.go.ug:",
            guardrail_status=GuardrailStatus.OK,
            sources=(SourceRef("Budget Speech 2024", "https://finance.go.ug/speech", "Budget"),),
            intent=Intent.DOCUMENT,
            confidence=0.8,
        )
    )

    with (
        patch("mofped_assistant.composition.container.get_query_router", return_value=router),
        patch("mofped_assistant.adapters.inbound.cli.commands.setup_logging"),
    ):
        result = runner.invoke(app, ["ask", "  budget   speech "])

    assert result.exit_code == 0
    assert "Budget Speech" in result.output
    router.handle.assert_awaited_once_with("budget speech")
