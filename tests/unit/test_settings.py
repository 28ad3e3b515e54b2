"""Unit tests for settings validation and the external systems table."""

import json

import pytest
from pydantic import ValidationError

from mofped_assistant.config.external_systems import load_external_systems
from mofped_assistant.config.settings import Settings
from mofped_assistant.core.domain.exceptions import InvalidConfigurationError

pytestmark = pytest.mark.unit


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.request_timeout == 15.0
        assert settings.document_search_limit == 5
        assert settings.service_search_limit == 3
        assert settings.location_urls[0] == "https://www.finance.go.ug/contact-us"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "5")
        monkeypatch.setenv("REQUEST_TIMEOUT", "2.5")

        settings = Settings(_env_file=None)

        assert settings.rate_limit_per_minute == 5
        assert settings.request_timeout == 2.5

    @pytest.mark.parametrize(
        "field,value",
        [
            ("request_timeout", 0),
            ("fetch_timeout", -1),
            ("document_search_limit", 0),
            ("max_query_length", -10),
        ],
    )
    def test_rejects_non_positive(self, field, value):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: value})

    def test_strips_bom_and_whitespace(self):
        settings = Settings(_env_file=None, user_agent="\ufeffMoFPED-Bot/1.0 ", site_url=" https://x ")

        assert settings.user_agent == "MoFPED-Bot/1.0"
        assert settings.site_url == "https://x"

    def test_ensure_directories(self, tmp_path):
        settings = Settings(_env_file=None, database_path=tmp_path / "nested" / "db.sqlite")
        settings.ensure_directories()
        assert (tmp_path / "nested").is_dir()


class TestExternalSystems:
    def test_bundled_table(self, catalog):
        assert {s.key for s in catalog.systems} >= {"ifms", "egp", "ura", "bou", "pbs"}
        assert catalog.version

    def test_find_mentioned_uses_whole_words(self, catalog):
        assert catalog.find_mentioned("How do I log into IFMS?").key == "ifms"
        assert catalog.find_mentioned("the Bank of Uganda rates").key == "bou"
        assert catalog.find_mentioned("future procedures") is None

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "systems.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(InvalidConfigurationError) as exc_info:
            load_external_systems(path)
        assert exc_info.value.context["path"] == str(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidConfigurationError):
            load_external_systems(tmp_path / "missing.json")

    def test_schema_violation(self, tmp_path):
        path = tmp_path / "systems.json"
        path.write_text(
            json.dumps({"version": "1", "systems": [{"key": "x", "name": "X", "aliases": []}]}),
            encoding="utf-8",
        )

        with pytest.raises(InvalidConfigurationError):
            load_external_systems(path)
