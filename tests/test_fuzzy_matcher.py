"""
Fuzzy 매칭 엔진 테스트
"""

import pytest

from agent.highlight.config import FuzzyMatchConfig, HighlightConfigError
from agent.highlight.fuzzy_matcher import (
    DEFAULT_FUZZY_OPTIONS,
    fuzzy_text_match,
    quick_fuzzy_match,
)
from agent.highlight.models import FuzzyAlgorithm


class TestFuzzyTextMatch:
    """fuzzy_text_match 테스트"""

    def test_exact_containment_short_circuits(self):
        """대상에 그대로 포함되면 알고리즘과 무관하게 exact"""
        result = fuzzy_text_match("CSS", "가계css대출")

        assert result.is_match is True
        assert result.confidence == 1.0
        assert result.algorithm == "exact"

    def test_case_sensitive_disables_lowercasing(self):
        options = FuzzyMatchConfig(case_sensitive=True)

        result = fuzzy_text_match("CSS", "가계css대출", options)

        assert result.algorithm == "levenshtein"
        assert result.confidence < 1.0

    def test_threshold_boundary(self):
        # "대출금" vs "대출": 거리 1 / 길이 3 -> 0.667
        below = fuzzy_text_match("대출금", "대출")
        assert below.is_match is False
        assert below.confidence == pytest.approx(2 / 3)

        above = fuzzy_text_match("대출금", "대출", FuzzyMatchConfig(threshold=0.6))
        assert above.is_match is True

    @pytest.mark.parametrize("algorithm", ["levenshtein", "jaro", "ngram"])
    def test_algorithm_selection(self, algorithm):
        options = FuzzyMatchConfig(algorithm=algorithm, threshold=0.0)

        result = fuzzy_text_match("kitten", "sitting", options)

        assert result.algorithm == algorithm
        assert 0.0 <= result.confidence <= 1.0
        assert result.is_match is True

    def test_jaro_value(self):
        options = FuzzyMatchConfig(algorithm=FuzzyAlgorithm.JARO)

        result = fuzzy_text_match("martha", "marhta", options)

        assert result.confidence == pytest.approx(0.9444, abs=1e-4)
        assert result.is_match is True

    def test_unknown_algorithm_rejected(self):
        with pytest.raises(HighlightConfigError):
            FuzzyMatchConfig(algorithm="soundex")

    def test_default_options(self):
        assert DEFAULT_FUZZY_OPTIONS.threshold == 0.7
        assert DEFAULT_FUZZY_OPTIONS.algorithm == FuzzyAlgorithm.LEVENSHTEIN
        assert DEFAULT_FUZZY_OPTIONS.case_sensitive is False


class TestQuickFuzzyMatch:
    """quick_fuzzy_match 테스트"""

    def test_contained(self):
        assert quick_fuzzy_match("대출", "가계 대출") is True

    def test_unrelated(self):
        assert quick_fuzzy_match("신용등급", "abc") is False


@pytest.mark.parametrize("algorithm", ["levenshtein", "jaro", "ngram"])
def test_exact_short_circuit_for_every_algorithm(algorithm):
    result = fuzzy_text_match("cat", "the cat sat", FuzzyMatchConfig(algorithm=algorithm))

    assert (result.is_match, result.confidence, result.algorithm) == (True, 1.0, "exact")
