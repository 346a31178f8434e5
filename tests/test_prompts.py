"""Tests for prompt construction and result models."""

import json
from datetime import date

from lexilens.models import AnalysisResult, UsageCounters
from lexilens.prompts import EnrichmentOptions, build_analysis_prompt, build_enrichment_prompt


class TestEnrichmentPrompt:
    def test_words_embedded_in_order(self):
        prompt = build_enrichment_prompt(["apple", "RUNTIME", "progam"])
        assert "apple, RUNTIME, progam" in prompt
        assert prompt.rstrip().endswith("use null.")

    def test_default_format_has_phonetic_and_special_cases(self):
        prompt = build_enrichment_prompt(["a"])
        assert '"phonetic"' in prompt
        assert "ALL CAPS" in prompt
        assert '"examples"' not in prompt

    def test_examples_variant(self):
        prompt = build_enrichment_prompt(["a"], EnrichmentOptions(include_examples=True))
        assert '"examples"' in prompt
        assert '"sentence"' in prompt

    def test_minimal_variant(self):
        options = EnrichmentOptions(include_phonetic=False, special_casing=False)
        prompt = build_enrichment_prompt(["a"], options)
        assert '"phonetic"' not in prompt
        assert "Special handling" not in prompt

    def test_template_is_valid_json(self):
        prompt = build_enrichment_prompt(["a"], EnrichmentOptions(include_examples=True))
        start = prompt.index("Required format for each word:\n") + len("Required format for each word:\n")
        template, _ = json.JSONDecoder().raw_decode(prompt, start)
        assert template["translation"] == "例子"


class TestAnalysisPrompt:
    def test_mentions_today_and_single_date_rule(self):
        prompt = build_analysis_prompt(date(2025, 3, 9))
        assert "Today is 2025.03.09" in prompt
        assert "expiration date when it is after today" in prompt
        assert "YYYY.MM.DD" in prompt

    def test_lists_expected_fields(self):
        prompt = build_analysis_prompt(date(2025, 1, 1))
        for field in AnalysisResult.model_fields:
            assert field in prompt


class TestAnalysisResult:
    def test_scalars_coerced_to_strings(self):
        result = AnalysisResult.model_validate({"production_id": 12345, "additional_info": "x"})
        assert result.production_id == "12345"

    def test_unexpected_shapes_become_null_and_extra_keys_dropped(self):
        result = AnalysisResult.model_validate({"production_date": ["2024"], "confidence": 0.9})
        assert result.production_date is None
        assert "confidence" not in result.model_dump()

    def test_empty_is_all_null(self):
        assert all(v is None for v in AnalysisResult.empty().model_dump().values())


def test_usage_counters_track_total():
    counters = UsageCounters()
    counters.record("analyze")
    counters.record("ask")
    counters.record("ask")
    assert counters.ask == 2
    assert counters.total == 3
