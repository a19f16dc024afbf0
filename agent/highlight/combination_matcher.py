"""
조합 매칭 탐색기 (Combination Match Finder)

문서 전체에서 단일 토큰과 연속 토큰 조합(2~4개)의 등장 위치를 찾고,
기본 점수 + 연속성/근접성 보너스로 점수를 매긴 뒤
겹치는 매칭을 점수 높은 순으로 정리합니다.

점수 체계 (기본 가중치 기준):
- 단일 토큰: 1점 + 보너스
- n개 조합: n점 + (n-1)점 조합 보너스 + 보너스
- 조합 전용 단어("이하" 등)는 단독 매칭 시 0.5점으로 제한,
  조합에 포함되면 0.5 x combination_bonus 추가

탐색:
    모든 검색 패턴(단일 토큰, 공백 결합, 직접 결합)을 하나의
    Aho-Corasick automaton으로 한 번에 탐색한 뒤, 정해진 순서
    (단일 토큰 -> 조합 크기 오름차순 -> 윈도우 순 -> 공백 결합 -> 직접 결합 -> 위치 순)로
    후보를 생성합니다.

시간복잡도:
    탐색 O(M + Z), 연속성 계산 O(T x W x D)
    - M: 문서 길이, Z: 총 등장 수
    - T: 토큰 윈도우 수, W: 문서 단어 수, D: lookahead 거리
    겹침 제거는 후보 수 K에 대해 최악 O(K^2)입니다.
"""

from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple
import logging
import re

import ahocorasick

from .automaton_cache import AutomatonCache, get_automaton_cache
from .config import ContinuityConfig, ScoringConfig
from .models import CombinationMatch, ContinuityInfo, Token

logger = logging.getLogger(__name__)

# 조합 최대 크기
MAX_COMBINATION_SIZE = 4

# 조합 전용 단어가 단독 매칭될 때의 최대 점수
COMBINATION_ONLY_SINGLE_CAP = 0.5

# 문장 내 동시 등장 토큰당 보너스
SENTENCE_COOCCURRENCE_BONUS = 0.3

# ContinuityInfo.matched_sequences에 기록하는 최대 구간 수 (점수에는 영향 없음)
MAX_RECORDED_SEQUENCES = 20

_WORD_CHAR = re.compile(r"[가-힣a-zA-Z0-9]")
_SENTENCE_SPLIT = re.compile(r"[.!?]")


def _lower(text: str) -> str:
    """길이를 보존하는 소문자 변환 (위치 인덱스가 원문과 일치해야 함)"""
    lowered = text.lower()
    if len(lowered) == len(text):
        return lowered
    return "".join(c.lower() if len(c.lower()) == 1 else c for c in text)


def is_valid_word_boundary(text: str, start: int, end: int) -> bool:
    """
    단어 경계 검사

    [start, end) 바로 앞 문자나 바로 뒤 문자 중 하나라도
    없거나(문자열 끝) 영숫자(한글 음절, 영문, 숫자)가 아니면 유효합니다.
    한국어는 조사가 붙어 쓰이므로("대출을") 한쪽 경계만 요구합니다.
    """
    before_open = start == 0 or not _WORD_CHAR.match(text[start - 1])
    after_open = end >= len(text) or not _WORD_CHAR.match(text[end])
    return before_open or after_open


def _substring_match(word: str, token_text: str) -> bool:
    return token_text in word or word in token_text


def calculate_continuity(
    document_text: str,
    tokens: Sequence[Token],
    config: Optional[ContinuityConfig] = None
) -> ContinuityInfo:
    """
    문서 내 연속성/근접성 계산

    1. 문서를 공백 단위 단어로 나누고, 토큰 수와 같은 길이의 윈도우를 훑습니다.
       윈도우의 각 위치 j는 단어 [i+j, i+j+lookahead] 중 하나가
       j번째 토큰과 부분 문자열 관계(양방향)이면 매칭으로 봅니다.
       매칭 비율이 min_match_ratio 이상이면 연속 구간이며 비율을 근접 점수에 더합니다.
    2. 문장(. ! ? 기준) 하나에 서로 다른 토큰이 2개 이상 있으면
       토큰당 0.3점. 가장 좋은 문장 하나만 반영합니다.
    3. 합계는 토큰 수 x 2로 제한하고 소수점 첫째 자리로 반올림합니다.
    """
    config = config or ContinuityConfig()
    token_texts = [t.text.lower() for t in tokens if t.text]
    if not document_text or not token_texts:
        return ContinuityInfo()

    doc_lower = _lower(document_text)
    words = doc_lower.split()
    size = len(token_texts)
    lookahead = config.max_distance - 1

    proximity = 0.0
    sequences: List[str] = []
    has_continuity = False

    for i in range(len(words) - size + 1):
        matched = 0
        for j, token_text in enumerate(token_texts):
            candidates = words[i + j:i + j + lookahead + 1]
            if any(_substring_match(w, token_text) for w in candidates):
                matched += 1

        ratio = matched / size
        if ratio >= config.min_match_ratio:
            has_continuity = True
            proximity += ratio
            if len(sequences) < MAX_RECORDED_SEQUENCES:
                sequences.append(" ".join(words[i:i + size]))

    distinct_tokens = set(token_texts)
    best_sentence_bonus = 0.0
    for sentence in _SENTENCE_SPLIT.split(doc_lower):
        found = sum(1 for t in distinct_tokens if t in sentence)
        if found >= 2:
            best_sentence_bonus = max(best_sentence_bonus, SENTENCE_COOCCURRENCE_BONUS * found)

    total = min(proximity + best_sentence_bonus, size * 2)

    return ContinuityInfo(
        has_document_continuity=has_continuity,
        proximity_score=round(total, 1),
        matched_sequences=tuple(sequences)
    )


def _build_automaton(patterns: Iterable[str]):
    automaton = ahocorasick.Automaton()
    for pattern in patterns:
        automaton.add_word(pattern, pattern)
    automaton.make_automaton()
    return automaton


def find_all_occurrences(
    text: str,
    patterns: Iterable[str],
    cache: Optional[AutomatonCache] = None
) -> Dict[str, List[int]]:
    """
    모든 패턴의 모든 등장 위치(겹침 포함)를 한 번의 탐색으로 찾기

    Args:
        text: 검색 대상 (이미 소문자화된 문서)
        patterns: 검색 패턴들
        cache: automaton 캐시 (기본값: 전역 캐시)

    Returns:
        {패턴: 오름차순 시작 위치 리스트}
    """
    unique_patterns = sorted({p for p in patterns if p})
    if not text or not unique_patterns:
        return {}

    cache = cache if cache is not None else get_automaton_cache()
    automaton = cache.get(unique_patterns)
    if automaton is None:
        automaton = _build_automaton(unique_patterns)
        cache.set(unique_patterns, automaton)
        logger.debug(f"Automaton built: {len(unique_patterns)} patterns")

    occurrences: Dict[str, List[int]] = defaultdict(list)
    for end_pos, pattern in automaton.iter(text):
        occurrences[pattern].append(end_pos - len(pattern) + 1)

    for positions in occurrences.values():
        positions.sort()

    return occurrences


def _search_plan(tokens: Sequence[Token]) -> List[Tuple[Tuple[Token, ...], List[str]]]:
    """(토큰 윈도우, 검색 패턴들) 목록을 후보 생성 순서대로 구성"""
    plan = [((token,), [_lower(token.text)]) for token in tokens if token.text]

    max_size = min(MAX_COMBINATION_SIZE, len(tokens))
    for size in range(2, max_size + 1):
        for i in range(len(tokens) - size + 1):
            window = tuple(tokens[i:i + size])
            texts = [t.text for t in window]
            # 1) 공백 결합: "가계 CSS 대출"  2) 직접 결합: "가계CSS대출"
            patterns = [
                p for p in (_lower(" ".join(texts)), _lower("".join(texts)))
                if len(p) >= 2
            ]
            plan.append((window, patterns))

    return plan


def find_combination_matches(
    document_text: str,
    search_tokens: Sequence[Token],
    config: Optional[ScoringConfig] = None,
    continuity_config: Optional[ContinuityConfig] = None,
    is_combination_only: Optional[Callable[[Token], bool]] = None,
    cache: Optional[AutomatonCache] = None
) -> List[CombinationMatch]:
    """
    문서에서 단일 토큰 및 토큰 조합 매칭 찾기

    Args:
        document_text: 문서 전체 텍스트
        search_tokens: 검색 토큰 (smart_tokenize 결과)
        config: 점수 가중치 (기본값: ScoringConfig())
        continuity_config: 연속성 검사 설정 (기본값: ContinuityConfig())
        is_combination_only: 조합에서만 의미 있는 토큰 판정 함수
        cache: automaton 캐시

    Returns:
        서로 겹치지 않는 매칭 리스트 (점수 내림차순 처리 순서)
    """
    if not document_text or not search_tokens:
        return []

    scoring = config or ScoringConfig()
    continuity_config = continuity_config or ContinuityConfig()
    is_combination_only = is_combination_only or (lambda token: False)

    doc_lower = _lower(document_text)
    plan = _search_plan(search_tokens)
    occurrences = find_all_occurrences(
        doc_lower,
        (p for _, patterns in plan for p in patterns),
        cache
    )

    candidates: List[CombinationMatch] = []
    continuity_by_window: Dict[Tuple[str, ...], ContinuityInfo] = {}

    for window, patterns in plan:
        size = len(window)
        for pattern in patterns:
            for start in occurrences.get(pattern, ()):
                end = start + len(pattern)
                if not is_valid_word_boundary(doc_lower, start, end):
                    continue

                key = tuple(t.text for t in window)
                continuity = continuity_by_window.get(key)
                if continuity is None:
                    continuity = calculate_continuity(document_text, window, continuity_config)
                    continuity_by_window[key] = continuity

                bonus = (
                    (scoring.continuity_bonus if continuity.has_document_continuity else 0)
                    + continuity.proximity_score * scoring.proximity_bonus
                )

                if size == 1:
                    base = scoring.single_token_score
                    score = min(base + bonus, scoring.max_score)
                    if is_combination_only(window[0]):
                        score = min(score, COMBINATION_ONLY_SINGLE_CAP)
                else:
                    base = size * scoring.single_token_score + (size - 1) * scoring.combination_bonus
                    if any(is_combination_only(t) for t in window):
                        bonus += 0.5 * scoring.combination_bonus
                    score = min(base + bonus, scoring.max_score)

                if score < scoring.min_score:
                    continue

                candidates.append(CombinationMatch(
                    tokens=list(window),
                    matched_text=document_text[start:end],
                    score=score,
                    base_score=base,
                    bonus_score=bonus,
                    start_index=start,
                    end_index=end,
                    continuity=continuity
                ))

    logger.debug(
        f"Combination search: {len(search_tokens)} tokens, "
        f"{len(plan)} windows, {len(candidates)} candidates"
    )

    return remove_overlapping_matches(candidates)


def remove_overlapping_matches(matches: Iterable[CombinationMatch]) -> List[CombinationMatch]:
    """
    겹치는 매칭 제거 (점수가 높은 것 우선)

    점수 내림차순으로 안정 정렬한 뒤, 이미 채택된 매칭과
    [start, end) 구간이 겹치지 않는 매칭만 채택합니다.
    """
    accepted: List[CombinationMatch] = []
    for match in sorted(matches, key=lambda m: m.score, reverse=True):
        if not any(match.overlaps(existing) for existing in accepted):
            accepted.append(match)
    return accepted
