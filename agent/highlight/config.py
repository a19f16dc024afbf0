"""
하이라이트 설정 모델

임계값, 알고리즘 선택, 점수 가중치를 담는 불변(frozen) 설정과
신뢰도를 하이라이트 레벨로 분류하는 함수를 제공합니다.

설정은 생성 시점에 검증되며, 잘못된 값은 HighlightConfigError로 즉시 실패합니다.
호출별 변경은 merge_highlight_config()로 새 설정을 만들어 사용합니다.

Example:
    >>> config = merge_highlight_config(
    ...     DEFAULT_HIGHLIGHT_CONFIG,
    ...     {"fuzzy_match": {"algorithm": "jaro"}, "scoring": {"min_score": 2}}
    ... )
    >>> config.fuzzy_match.algorithm
    <FuzzyAlgorithm.JARO: 'jaro'>
"""

from dataclasses import dataclass, field, fields, is_dataclass, replace
from numbers import Real
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from .models import FuzzyAlgorithm, HighlightLevel, MatchType


class HighlightConfigError(ValueError):
    """하이라이트 설정 값이 유효하지 않을 때 발생"""


def _check_number(section: str, name: str, value: Any) -> None:
    # bool은 int의 하위 타입이므로 별도로 거부
    if isinstance(value, bool) or not isinstance(value, Real):
        raise HighlightConfigError(f"{section}.{name} must be a number, got {value!r}")


def _check_unit_interval(section: str, name: str, value: Any) -> None:
    _check_number(section, name, value)
    if not 0.0 <= value <= 1.0:
        raise HighlightConfigError(f"{section}.{name} must be within [0, 1], got {value}")


def _check_non_negative(section: str, name: str, value: Any) -> None:
    _check_number(section, name, value)
    if value < 0:
        raise HighlightConfigError(f"{section}.{name} must be >= 0, got {value}")


def _check_bool(section: str, name: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise HighlightConfigError(f"{section}.{name} must be a bool, got {value!r}")


@dataclass(frozen=True)
class FuzzyMatchConfig:
    """유사도 매칭 설정"""
    enabled: bool = True
    threshold: float = 0.7
    algorithm: FuzzyAlgorithm = FuzzyAlgorithm.LEVENSHTEIN
    case_sensitive: bool = False

    def __post_init__(self):
        _check_bool("fuzzy_match", "enabled", self.enabled)
        _check_unit_interval("fuzzy_match", "threshold", self.threshold)
        _check_bool("fuzzy_match", "case_sensitive", self.case_sensitive)
        try:
            object.__setattr__(self, "algorithm", FuzzyAlgorithm(self.algorithm))
        except ValueError:
            raise HighlightConfigError(
                f"fuzzy_match.algorithm must be one of "
                f"{[a.value for a in FuzzyAlgorithm]}, got {self.algorithm!r}"
            ) from None


@dataclass(frozen=True)
class SemanticMatchConfig:
    """의미 기반 매칭 설정 (임베딩 매칭은 구현되지 않으며 기본 비활성화)"""
    enabled: bool = False
    threshold: float = 0.8

    def __post_init__(self):
        _check_bool("semantic_match", "enabled", self.enabled)
        _check_unit_interval("semantic_match", "threshold", self.threshold)


@dataclass(frozen=True)
class VisualConfig:
    """시각적 설정"""
    enable_animations: bool = True
    show_score_info: bool = False  # 개발용

    def __post_init__(self):
        _check_bool("visual", "enable_animations", self.enable_animations)
        _check_bool("visual", "show_score_info", self.show_score_info)


@dataclass(frozen=True)
class TextProcessingConfig:
    """검색 텍스트 전처리 설정"""
    enable_phrase_extraction: bool = True
    enable_entity_recognition: bool = True
    min_term_length: int = 2
    max_term_length: int = 50
    phrase_min_words: int = 2
    phrase_max_words: int = 5

    def __post_init__(self):
        _check_bool("text_processing", "enable_phrase_extraction", self.enable_phrase_extraction)
        _check_bool("text_processing", "enable_entity_recognition", self.enable_entity_recognition)
        for name in ("min_term_length", "max_term_length", "phrase_min_words", "phrase_max_words"):
            _check_non_negative("text_processing", name, getattr(self, name))
        if self.min_term_length > self.max_term_length:
            raise HighlightConfigError("text_processing.min_term_length must be <= max_term_length")
        if self.phrase_min_words > self.phrase_max_words:
            raise HighlightConfigError("text_processing.phrase_min_words must be <= phrase_max_words")


@dataclass(frozen=True)
class PriorityConfig:
    """
    하이라이트 우선순위 / 과다 하이라이트 방지 설정

    Attributes:
        max_highlights: 반환할 최대 구간 수 (0이면 제한 없음)
        max_highlight_ratio: 문서 길이 대비 하이라이트 가능한 최대 비율

    Note:
        비율 제한은 문서 전체 길이 기준입니다. 짧은 문서에서는 점수가 가장 높은
        구간이라도 길이가 남은 예산보다 길면 제외되고, 더 짧은 구간이 대신 남습니다.
        (예: 28자 문서 x 0.25 = 7자 -> 9자 "가계 CSS 대출"은 제외)
        모든 매칭을 구간으로 받으려면 max_highlight_ratio=1.0을 사용하세요.
    """
    max_highlights: int = 100
    max_highlight_ratio: float = 0.25

    def __post_init__(self):
        _check_non_negative("priority", "max_highlights", self.max_highlights)
        _check_unit_interval("priority", "max_highlight_ratio", self.max_highlight_ratio)


@dataclass(frozen=True)
class HighlightThresholds:
    """
    신뢰도 -> 레벨 분류 경계값

    context <= related <= similar <= exact 순서가 유지되어야 합니다.
    """
    exact: float = 1.0
    similar: float = 0.8
    related: float = 0.6
    context: float = 0.4

    def __post_init__(self):
        for name in ("exact", "similar", "related", "context"):
            _check_unit_interval("thresholds", name, getattr(self, name))
        if not (self.context <= self.related <= self.similar <= self.exact):
            raise HighlightConfigError(
                "thresholds must be ascending: context <= related <= similar <= exact "
                f"(got {self.context}, {self.related}, {self.similar}, {self.exact})"
            )


@dataclass(frozen=True)
class ScoringConfig:
    """조합 매칭 점수 가중치"""
    single_token_score: float = 1
    combination_bonus: float = 1
    continuity_bonus: float = 1
    proximity_bonus: float = 0.5
    min_score: float = 1
    max_score: float = 10

    def __post_init__(self):
        for f in fields(self):
            _check_non_negative("scoring", f.name, getattr(self, f.name))
        if self.min_score > self.max_score:
            raise HighlightConfigError(
                f"scoring.min_score ({self.min_score}) must be <= max_score ({self.max_score})"
            )


@dataclass(frozen=True)
class ContinuityConfig:
    """
    문서 연속성 검사 설정

    Attributes:
        max_distance: 연속성으로 인정할 최대 단어 거리 (lookahead = max_distance - 1)
        min_match_ratio: 구간이 연속으로 인정되는 최소 매칭 비율
    """
    max_distance: int = 3
    min_match_ratio: float = 0.6

    def __post_init__(self):
        _check_number("continuity", "max_distance", self.max_distance)
        if self.max_distance < 1:
            raise HighlightConfigError("continuity.max_distance must be >= 1")
        _check_unit_interval("continuity", "min_match_ratio", self.min_match_ratio)


@dataclass(frozen=True)
class HighlightConfig:
    """하이라이트 전체 설정"""
    fuzzy_match: FuzzyMatchConfig = field(default_factory=FuzzyMatchConfig)
    semantic_match: SemanticMatchConfig = field(default_factory=SemanticMatchConfig)
    visual: VisualConfig = field(default_factory=VisualConfig)
    text_processing: TextProcessingConfig = field(default_factory=TextProcessingConfig)
    priority: PriorityConfig = field(default_factory=PriorityConfig)
    thresholds: HighlightThresholds = field(default_factory=HighlightThresholds)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    continuity: ContinuityConfig = field(default_factory=ContinuityConfig)

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not is_dataclass(value) or isinstance(value, type):
                raise HighlightConfigError(f"{f.name} must be a config section, got {value!r}")


# 프로세스 전역 기본 설정 (불변)
DEFAULT_HIGHLIGHT_CONFIG = HighlightConfig()
DEFAULT_THRESHOLDS = DEFAULT_HIGHLIGHT_CONFIG.thresholds


def merge_highlight_config(
    base: HighlightConfig,
    overrides: Optional[Mapping[str, Any]] = None
) -> HighlightConfig:
    """
    base ⊕ overrides 로 새 설정 생성 (리프 필드 단위로 override 우선)

    Args:
        base: 기준 설정
        overrides: {섹션명: {필드명: 값}} 또는 {섹션명: 섹션 인스턴스}

    Returns:
        새 HighlightConfig (base는 변경되지 않음)

    Raises:
        HighlightConfigError: 알 수 없는 섹션/필드 또는 유효하지 않은 값
    """
    if not overrides:
        return base

    section_names = {f.name for f in fields(base)}
    updated_sections = {}

    for section_name, section_override in overrides.items():
        if section_name not in section_names:
            raise HighlightConfigError(f"Unknown config section: {section_name!r}")

        current = getattr(base, section_name)

        if isinstance(section_override, type(current)):
            updated_sections[section_name] = section_override
            continue

        if not isinstance(section_override, Mapping):
            raise HighlightConfigError(
                f"Override for {section_name!r} must be a mapping, got {type(section_override).__name__}"
            )

        field_names = {f.name for f in fields(current)}
        unknown = set(section_override) - field_names
        if unknown:
            raise HighlightConfigError(
                f"Unknown field(s) in {section_name!r}: {sorted(unknown)}"
            )

        updated_sections[section_name] = replace(current, **section_override)

    return replace(base, **updated_sections)


def _preset(scoring: ScoringConfig) -> HighlightConfig:
    return replace(DEFAULT_HIGHLIGHT_CONFIG, scoring=scoring)


HIGHLIGHT_PRESETS: Mapping[str, HighlightConfig] = MappingProxyType({
    # 엄격한 매칭 (고품질만)
    "strict": _preset(ScoringConfig(
        single_token_score=1,
        combination_bonus=2,
        continuity_bonus=2,
        proximity_bonus=1,
        min_score=3,
        max_score=10,
    )),
    # 관대한 매칭 (더 많은 하이라이팅)
    "permissive": _preset(ScoringConfig(
        single_token_score=1,
        combination_bonus=0.5,
        continuity_bonus=1,
        proximity_bonus=0.3,
        min_score=0.5,
        max_score=15,
    )),
    "balanced": DEFAULT_HIGHLIGHT_CONFIG,
})


def get_preset(name: str) -> HighlightConfig:
    """프리셋 이름으로 설정 조회"""
    try:
        return HIGHLIGHT_PRESETS[name]
    except KeyError:
        raise HighlightConfigError(
            f"Unknown highlight preset: {name!r} (available: {list(HIGHLIGHT_PRESETS)})"
        ) from None


def determine_highlight_level(
    confidence: float,
    match_type: Union[MatchType, str] = MatchType.FUZZY,
    thresholds: HighlightThresholds = DEFAULT_THRESHOLDS
) -> HighlightLevel:
    """
    신뢰도와 매칭 유형으로 하이라이트 레벨 결정

    판정 순서:
        1. confidence >= exact -> exact
        2. entity 이고 confidence >= 0.7 -> entity
        3. phrase 이고 confidence >= 0.7 -> phrase
        4. similar / related / context 순으로 비교
        5. 어디에도 해당하지 않으면 context

    Note:
        가장 낮은 임계값보다 작은 신뢰도도 context를 반환합니다.
        호출자는 is_match로 먼저 걸러내야 합니다.
    """
    match_type = MatchType(match_type)

    if confidence >= thresholds.exact:
        return HighlightLevel.EXACT
    if match_type == MatchType.ENTITY and confidence >= 0.7:
        return HighlightLevel.ENTITY
    if match_type == MatchType.PHRASE and confidence >= 0.7:
        return HighlightLevel.PHRASE
    if confidence >= thresholds.similar:
        return HighlightLevel.SIMILAR
    if confidence >= thresholds.related:
        return HighlightLevel.RELATED
    if confidence >= thresholds.context:
        return HighlightLevel.CONTEXT
    return HighlightLevel.CONTEXT


def score_class(score: float) -> int:
    """점수 구간 (1-6), 렌더러 CSS 클래스용 (docx-highlight-score-N)"""
    for bucket in (6, 5, 4, 3, 2):
        if score >= bucket:
            return bucket
    return 1
