"""
하이라이트 매칭 Agent 모듈

문서에서 검색 문구의 근사 위치를 찾아 하이라이트 구간을 만드는 Micro Agent들

- 유사도: Levenshtein / Jaro / n-gram
- 스마트 토큰화: 한글/영문/숫자 경계 인식 ("가계CSS대출" -> 가계, CSS, 대출)
- 조합 매칭: Aho-Corasick 기반 단일/조합 토큰 탐색 + 연속성 점수 + 겹침 제거
- HighlightMatchAgent: 토큰화 -> 조합 매칭 -> 레벨 판정 -> 과다 하이라이트 제한
"""

from .models import (
    TokenType,
    FuzzyAlgorithm,
    MatchType,
    HighlightLevel,
    Token,
    FuzzyMatchResult,
    ContinuityInfo,
    CombinationMatch,
    HighlightSpan,
)
from .similarity import (
    levenshtein_distance,
    levenshtein_similarity,
    jaro_similarity,
    generate_ngrams,
    ngram_similarity,
)
from .config import (
    HighlightConfigError,
    FuzzyMatchConfig,
    HighlightConfig,
    HighlightThresholds,
    ScoringConfig,
    ContinuityConfig,
    DEFAULT_HIGHLIGHT_CONFIG,
    HIGHLIGHT_PRESETS,
    merge_highlight_config,
    get_preset,
    determine_highlight_level,
    score_class,
)
from .fuzzy_matcher import fuzzy_text_match, quick_fuzzy_match
from .tokenizer import get_character_type, split_by_language_boundary, smart_tokenize
from .keywords import ImportantKeywordConfig, add_custom_keywords, filter_highlight_words
from .automaton_cache import AutomatonCache, get_automaton_cache
from .combination_matcher import (
    calculate_continuity,
    find_combination_matches,
    remove_overlapping_matches,
)
from .highlight_agent import HighlightMatchAgent, HighlightResult

__all__ = [
    # 모델
    "TokenType",
    "FuzzyAlgorithm",
    "MatchType",
    "HighlightLevel",
    "Token",
    "FuzzyMatchResult",
    "ContinuityInfo",
    "CombinationMatch",
    "HighlightSpan",
    # 유사도
    "levenshtein_distance",
    "levenshtein_similarity",
    "jaro_similarity",
    "generate_ngrams",
    "ngram_similarity",
    # 설정
    "HighlightConfigError",
    "FuzzyMatchConfig",
    "HighlightConfig",
    "HighlightThresholds",
    "ScoringConfig",
    "ContinuityConfig",
    "DEFAULT_HIGHLIGHT_CONFIG",
    "HIGHLIGHT_PRESETS",
    "merge_highlight_config",
    "get_preset",
    "determine_highlight_level",
    "score_class",
    # 퍼지 매칭 / 토큰화
    "fuzzy_text_match",
    "quick_fuzzy_match",
    "get_character_type",
    "split_by_language_boundary",
    "smart_tokenize",
    # 키워드
    "ImportantKeywordConfig",
    "add_custom_keywords",
    "filter_highlight_words",
    # 조합 매칭
    "AutomatonCache",
    "get_automaton_cache",
    "calculate_continuity",
    "find_combination_matches",
    "remove_overlapping_matches",
    # Agent
    "HighlightMatchAgent",
    "HighlightResult",
]
