"""Unit tests for deterministic response synthesis."""

import random

import pytest

from mofped_assistant.core.domain import GuardrailStatus, OptionAction
from mofped_assistant.core.services.response_synthesizer import (
    ResponseSynthesizer,
    has_contact_intent,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def synthesizer(catalog):
    return ResponseSynthesizer(catalog, site_name="finance.go.ug")


class TestNotFound:
    def test_empty_results(self, synthesizer):
        response = synthesizer.generate("anything", [])

        assert response.guardrail_status is GuardrailStatus.NOT_FOUND
        assert response.sources == ()
        assert response.options == ()
        assert "couldn't find any relevant documents on finance.go.ug" in response.summary

    def test_empty_results_even_for_known_system(self, synthesizer):
        response = synthesizer.generate("IFMS contact", [])
        assert response.guardrail_status is GuardrailStatus.NOT_FOUND


class TestSystemCards:
    def test_contact_card_cites_contact_document(self, synthesizer, make_result):
        results = [
            make_result("Budget Speech 2024"),
            make_result("IFMS Contact Center", category="Contact Information"),
        ]

        response = synthesizer.generate("IFMS support phone", results)

        assert response.guardrail_status is GuardrailStatus.OK
        assert "**IFMS Contact Center**" in response.summary
        assert "Phone: +256 414 230 000" in response.summary
        assert "Email: support@ifms.go.ug" in response.summary
        assert [s.title for s in response.sources] == ["IFMS Contact Center"]
        assert response.options == ()

    def test_contact_card_falls_back_to_portal(self, synthesizer, make_result):
        response = synthesizer.generate("egp contact", [make_result("Budget Speech 2024")])

        assert "egp-support@egp.go.ug" in response.summary
        assert response.sources[0].url == "https://egpuganda.go.ug/"
        assert response.sources[0].category == "External Systems"

    def test_contact_card_without_phone(self, synthesizer, make_result):
        response = synthesizer.generate("ura phone number", [make_result("Tax Report")])

        assert "**Uganda Revenue Authority**" in response.summary
        assert "Phone:" not in response.summary
        assert response.sources[0].url == "https://www.ura.go.ug"

    def test_info_card_has_configured_options(self, synthesizer, make_result):
        results = [make_result("EGP Uganda Procurement Portal", category="External Systems")]

        response = synthesizer.generate("tell me about egp", results)

        assert "**Electronic Government Procurement (EGP) Portal**" in response.summary
        assert [o.label for o in response.options] == [
            "Talk to someone",
            "View procurement policy",
            "Visit EGP portal",
        ]
        assert response.options[2].action == OptionAction.EXTERNAL
        assert response.options[2].payload == "https://egpuganda.go.ug/"
        assert response.sources[0].title == "EGP Uganda Procurement Portal"

    def test_info_card_ignores_result_in_wrong_category(self, synthesizer, make_result):
        results = [make_result("PBS user guide", category="Policies")]

        response = synthesizer.generate("pbs", results)

        assert response.sources[0].url == "https://pbsmof.finance.go.ug/auth/login"
        assert 2 <= len(response.options) <= 3

    def test_procurement_support_contact_gets_egp_card(self, synthesizer, make_result):
        response = synthesizer.generate(
            "procurement support contact", [make_result("Procurement Guidelines", category="Policies")]
        )

        assert "**EGP Support Contact**" in response.summary
        assert "egp-support@egp.go.ug" in response.summary
        assert response.sources[0].url == "https://egpuganda.go.ug/"

    @pytest.mark.parametrize(
        "query, system_name",
        [
            ("tax clearance", "Uganda Revenue Authority (URA)"),
            ("non-tax revenue", "Uganda Revenue Authority (URA)"),
            ("climate projects", "Climate Finance Platform (CFP)"),
        ],
    )
    def test_short_aliases_name_their_system(self, synthesizer, make_result, query, system_name):
        response = synthesizer.generate(query, [make_result("Budget Speech 2024")])
        assert f"information about the **{system_name}**" in response.summary

    def test_alias_needs_word_boundary(self, synthesizer, make_result):
        # "ura" inside "procedure" and "bou" inside "about" are not mentions
        response = synthesizer.generate("procedure about budgets", [make_result("Budget Speech")])
        assert response.summary.startswith("I found 1 relevant document on finance.go.ug:")


class TestGenericSummary:
    def test_single_category(self, synthesizer, make_result):
        results = [make_result("Budget Speech 2024"), make_result("Budget Paper")]

        response = synthesizer.generate("budget", results)

        assert response.summary.startswith("I found 2 relevant documents on finance.go.ug:")
        assert 'All documents are in the "Budget" category.' in response.summary
        assert response.summary.endswith("Click on the links below to view the full documents.")
        assert response.guardrail_status is GuardrailStatus.OK

    def test_multiple_categories_and_missing_category(self, synthesizer, make_result):
        results = [
            make_result("Budget Speech", category="Budget"),
            make_result("Debt Strategy", category="Policies"),
            make_result("Untitled Note", category=None),
        ]

        response = synthesizer.generate("strategy", results)
        assert "Documents are categorized as: Budget, Policies, Other." in response.summary

    def test_lists_top_three_with_truncated_descriptions(self, synthesizer, make_result):
        long_description = "x" * 150
        results = [make_result(f"Report {i}", description=long_description) for i in range(5)]

        response = synthesizer.generate("report", results)

        assert response.summary.count("• ") == 3
        assert f"• Report 0 - {'x' * 100}..." in response.summary
        assert "Report 3" not in response.summary
        assert len(response.sources) == 5

    def test_sources_preserve_order(self, synthesizer, make_result):
        results = [make_result("B doc"), make_result("A doc")]
        response = synthesizer.generate("doc", results)
        assert [s.title for s in response.sources] == ["B doc", "A doc"]


class TestGuardrail:
    # No external-system aliases: those queries get configured cards, not listings
    VOCABULARY = ["budget", "report", "debt", "strategy", "speech", "policy", "framework", "paper", "q1", "2024"]

    def test_listed_titles_come_from_results(self, synthesizer, make_result):
        rng = random.Random(1234)
        for _ in range(200):
            titles = {
                " ".join(rng.choices(self.VOCABULARY, k=rng.randint(1, 4))).title()
                for _ in range(rng.randint(1, 6))
            }
            results = [make_result(t, category=rng.choice(["Budget", "Reports", None])) for t in titles]
            query = " ".join(rng.choices(self.VOCABULARY, k=3))

            response = synthesizer.generate(query, results)

            listed = [
                line[2:].split(" - ")[0]
                for line in response.summary.splitlines()
                if line.startswith("• ")
            ]
            assert set(listed) <= titles
            assert {s.title for s in response.sources} <= titles

    def test_has_contact_intent(self):
        assert has_contact_intent("IFMS Support")
        assert has_contact_intent("phone number")
        assert not has_contact_intent("ifms login")
