"""
하이라이트 설정 / 레벨 분류 테스트
"""

import pytest

from agent.highlight.config import (
    DEFAULT_HIGHLIGHT_CONFIG,
    DEFAULT_THRESHOLDS,
    HIGHLIGHT_PRESETS,
    FuzzyMatchConfig,
    HighlightConfigError,
    HighlightThresholds,
    PriorityConfig,
    ScoringConfig,
    determine_highlight_level,
    get_preset,
    merge_highlight_config,
    score_class,
)
from agent.highlight.models import FuzzyAlgorithm, HighlightLevel, MatchType


class TestConfigValidation:
    """설정 생성 시점 검증 테스트"""

    def test_defaults(self):
        config = DEFAULT_HIGHLIGHT_CONFIG

        assert config.fuzzy_match.enabled is True
        assert config.fuzzy_match.threshold == 0.7
        assert config.semantic_match.enabled is False
        assert config.priority.max_highlight_ratio == 0.25
        assert config.scoring.min_score == 1
        assert config.scoring.max_score == 10

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_threshold_out_of_range(self, threshold):
        with pytest.raises(HighlightConfigError):
            FuzzyMatchConfig(threshold=threshold)

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            FuzzyMatchConfig(threshold=2)

    def test_threshold_must_be_number(self):
        with pytest.raises(HighlightConfigError):
            FuzzyMatchConfig(threshold="high")

    def test_thresholds_must_be_ascending(self):
        with pytest.raises(HighlightConfigError):
            HighlightThresholds(exact=1.0, similar=0.5, related=0.6, context=0.4)

    def test_scoring_min_above_max(self):
        with pytest.raises(HighlightConfigError):
            ScoringConfig(min_score=11, max_score=10)

    def test_scoring_negative_weight(self):
        with pytest.raises(HighlightConfigError):
            ScoringConfig(combination_bonus=-1)

    def test_priority_ratio_range(self):
        with pytest.raises(HighlightConfigError):
            PriorityConfig(max_highlight_ratio=1.2)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_HIGHLIGHT_CONFIG.fuzzy_match.threshold = 0.1


class TestMergeHighlightConfig:
    """merge_highlight_config 테스트"""

    def test_leaf_override_wins(self):
        merged = merge_highlight_config(
            DEFAULT_HIGHLIGHT_CONFIG,
            {"fuzzy_match": {"algorithm": "jaro"}, "scoring": {"min_score": 2}}
        )

        assert merged.fuzzy_match.algorithm == FuzzyAlgorithm.JARO
        assert merged.fuzzy_match.threshold == 0.7
        assert merged.scoring.min_score == 2
        assert merged.scoring.max_score == 10

    def test_base_unchanged(self):
        merge_highlight_config(DEFAULT_HIGHLIGHT_CONFIG, {"scoring": {"min_score": 5}})

        assert DEFAULT_HIGHLIGHT_CONFIG.scoring.min_score == 1

    def test_section_instance_override(self):
        scoring = ScoringConfig(min_score=0.5)

        merged = merge_highlight_config(DEFAULT_HIGHLIGHT_CONFIG, {"scoring": scoring})

        assert merged.scoring is scoring

    def test_empty_override_returns_base(self):
        assert merge_highlight_config(DEFAULT_HIGHLIGHT_CONFIG, None) is DEFAULT_HIGHLIGHT_CONFIG
        assert merge_highlight_config(DEFAULT_HIGHLIGHT_CONFIG, {}) is DEFAULT_HIGHLIGHT_CONFIG

    def test_unknown_section(self):
        with pytest.raises(HighlightConfigError):
            merge_highlight_config(DEFAULT_HIGHLIGHT_CONFIG, {"colors": {"exact": "red"}})

    def test_unknown_field(self):
        with pytest.raises(HighlightConfigError):
            merge_highlight_config(DEFAULT_HIGHLIGHT_CONFIG, {"fuzzy_match": {"cutoff": 0.5}})

    def test_invalid_value_rejected(self):
        with pytest.raises(HighlightConfigError):
            merge_highlight_config(DEFAULT_HIGHLIGHT_CONFIG, {"fuzzy_match": {"threshold": 3}})

    def test_non_mapping_override(self):
        with pytest.raises(HighlightConfigError):
            merge_highlight_config(DEFAULT_HIGHLIGHT_CONFIG, {"scoring": 3})


class TestPresets:
    """프리셋 테스트"""

    def test_available_presets(self):
        assert set(HIGHLIGHT_PRESETS) == {"strict", "balanced", "permissive"}

    def test_strict(self):
        scoring = get_preset("strict").scoring

        assert scoring.combination_bonus == 2
        assert scoring.continuity_bonus == 2
        assert scoring.min_score == 3

    def test_permissive(self):
        scoring = get_preset("permissive").scoring

        assert scoring.min_score == 0.5
        assert scoring.max_score == 15

    def test_balanced_is_default(self):
        assert get_preset("balanced") == DEFAULT_HIGHLIGHT_CONFIG

    def test_unknown_preset(self):
        with pytest.raises(HighlightConfigError):
            get_preset("aggressive")


class TestDetermineHighlightLevel:
    """신뢰도 -> 레벨 분류 테스트"""

    @pytest.mark.parametrize("confidence, match_type, expected", [
        (1.0, MatchType.FUZZY, HighlightLevel.EXACT),
        (1.0, MatchType.ENTITY, HighlightLevel.EXACT),
        (0.75, MatchType.ENTITY, HighlightLevel.ENTITY),
        (0.75, MatchType.PHRASE, HighlightLevel.PHRASE),
        (0.75, MatchType.FUZZY, HighlightLevel.RELATED),
        (0.65, MatchType.ENTITY, HighlightLevel.RELATED),
        (0.95, MatchType.FUZZY, HighlightLevel.SIMILAR),
        (0.85, MatchType.FUZZY, HighlightLevel.SIMILAR),
        (0.65, MatchType.FUZZY, HighlightLevel.RELATED),
        (0.8, MatchType.EXACT, HighlightLevel.SIMILAR),
        (0.5, MatchType.FUZZY, HighlightLevel.CONTEXT),
        (0.4, MatchType.FUZZY, HighlightLevel.CONTEXT),
    ])
    def test_levels(self, confidence, match_type, expected):
        assert determine_highlight_level(confidence, match_type) == expected

    def test_below_lowest_threshold_falls_back_to_context(self):
        assert determine_highlight_level(0.1) == HighlightLevel.CONTEXT

    def test_match_type_as_string(self):
        assert determine_highlight_level(0.75, "entity") == HighlightLevel.ENTITY

    def test_custom_thresholds(self):
        thresholds = HighlightThresholds(exact=0.95, similar=0.9, related=0.7, context=0.5)

        assert determine_highlight_level(0.96, thresholds=thresholds) == HighlightLevel.EXACT
        assert determine_highlight_level(0.85, thresholds=thresholds) == HighlightLevel.RELATED

    def test_default_thresholds(self):
        assert DEFAULT_THRESHOLDS.exact == 1.0
        assert DEFAULT_THRESHOLDS.context == 0.4


class TestScoreClass:
    """점수 구간 테스트"""

    @pytest.mark.parametrize("score, expected", [
        (8.45, 6),
        (6, 6),
        (5.9, 5),
        (3, 3),
        (2.5, 2),
        (1, 1),
        (0.5, 1),
    ])
    def test_buckets(self, score, expected):
        assert score_class(score) == expected
