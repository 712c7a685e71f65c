"""
Tests for glyphguard.detection: the aggregated detect() result.
"""

import json

import pytest
from pydantic import ValidationError

from glyphguard import detect
from glyphguard.models import CATEGORY_FIELDS, DetectionResult, SpanCategory
from tests.conftest import CYRILLIC_A, LRE, OBFUSCATED_SAMPLE, ZWSP


class TestDetectBasics:

    def test_empty_text(self):
        assert detect("") == DetectionResult()

    def test_single_zero_width_space(self):
        result = detect(ZWSP)
        assert result.zero_width_chars == 1
        assert result.total_issues == 1
        assert result.noise_score == pytest.approx(100.0)
        assert result.max_line_density == pytest.approx(100.0)
        assert len(result.highlighted_positions) == 1
        span = result.highlighted_positions[0]
        assert span.category == SpanCategory.INVISIBLE
        assert (span.start, span.end) == (0, 1)

    def test_noise_score_uses_text_length(self):
        result = detect(f"a{ZWSP}b")
        assert result.noise_score == pytest.approx(100 / 3)

    def test_homoglyph_also_mixes_scripts(self):
        result = detect(f"p{CYRILLIC_A}ypal")
        assert result.homoglyphs == 1
        assert result.mixed_scripts == 1
        assert result.total_issues == 2

    def test_clean_text(self):
        result = detect("Plain ASCII text")
        assert result.total_issues == 0
        assert result.highlighted_positions == ()


class TestDetectSample:

    def test_sample_counters(self):
        result = detect(OBFUSCATED_SAMPLE)
        assert result.zero_width_chars == 1
        assert result.homoglyphs == 1
        assert result.mixed_scripts == 1
        assert result.non_breaking_spaces == 1
        assert result.suspicious_punctuation == 3
        assert result.control_chars == 1
        assert result.bidi_marks == 1
        assert result.unmatched_bidi == 1

    def test_total_is_sum_of_categories(self):
        result = detect(OBFUSCATED_SAMPLE)
        assert result.total_issues == sum(result.category_counts().values())
        assert list(result.category_counts()) == list(CATEGORY_FIELDS)

    def test_spans_ordered(self):
        result = detect(OBFUSCATED_SAMPLE)
        starts = [span.start for span in result.highlighted_positions]
        assert starts == sorted(starts)

    def test_json_dump(self):
        payload = json.loads(detect(OBFUSCATED_SAMPLE).model_dump_json())
        assert payload["unmatched_bidi"] == 1
        assert payload["highlighted_positions"][0]["category"] == "invisible"


class TestDetectEdgeCases:

    def test_lone_surrogate(self):
        result = detect("ab\ud800cd")
        assert result.total_issues == 0

    def test_deeply_nested_bidi(self):
        result = detect(LRE * 10_000)
        assert result.bidi_marks == 10_000
        assert result.unmatched_bidi == 10_000
        assert result.repeating_invisible == 9_999
        assert result.total_issues == 29_999
        assert result.noise_score == pytest.approx(100.0)

    def test_result_is_frozen(self):
        result = detect(ZWSP)
        with pytest.raises(ValidationError):
            result.total_issues = 0

    def test_results_are_independent(self):
        first = detect(ZWSP)
        detect(LRE * 3)
        assert first == detect(ZWSP)
