"""
Fuzzy 매칭 엔진

정확 포함(exact containment)을 먼저 확인하고,
실패하면 설정된 알고리즘으로 유사도를 계산합니다.
"""

from typing import Callable, Dict

from .config import FuzzyMatchConfig
from .models import FuzzyAlgorithm, FuzzyMatchResult
from .similarity import jaro_similarity, levenshtein_similarity, ngram_similarity

# fuzzy_text_match()의 옵션은 설정 모델의 fuzzy_match 섹션과 같은 구조
FuzzyMatchOptions = FuzzyMatchConfig

# 기본 옵션: threshold=0.7, levenshtein, 대소문자 무시
DEFAULT_FUZZY_OPTIONS = FuzzyMatchOptions()

_ALGORITHMS: Dict[FuzzyAlgorithm, Callable[[str, str], float]] = {
    FuzzyAlgorithm.LEVENSHTEIN: levenshtein_similarity,
    FuzzyAlgorithm.JARO: jaro_similarity,
    FuzzyAlgorithm.NGRAM: ngram_similarity,
}


def fuzzy_text_match(
    search_word: str,
    target_text: str,
    options: FuzzyMatchOptions = DEFAULT_FUZZY_OPTIONS
) -> FuzzyMatchResult:
    """
    검색어와 대상 텍스트의 매칭 여부 및 신뢰도 계산

    Args:
        search_word: 검색어
        target_text: 대상 텍스트
        options: threshold, algorithm, case_sensitive

    Returns:
        FuzzyMatchResult. 대상에 검색어가 그대로 포함되면
        알고리즘과 무관하게 confidence=1.0, algorithm='exact'.
    """
    search = search_word if options.case_sensitive else search_word.lower()
    target = target_text if options.case_sensitive else target_text.lower()

    if search in target:
        return FuzzyMatchResult(is_match=True, confidence=1.0, algorithm="exact")

    confidence = _ALGORITHMS[options.algorithm](search, target)

    return FuzzyMatchResult(
        is_match=confidence >= options.threshold,
        confidence=confidence,
        algorithm=options.algorithm.value
    )


def quick_fuzzy_match(search_word: str, target_text: str) -> bool:
    """기본 옵션으로 빠른 매칭 여부 확인"""
    return fuzzy_text_match(search_word, target_text, DEFAULT_FUZZY_OPTIONS).is_match
