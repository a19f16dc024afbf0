"""
하이라이트 매칭 데이터 모델

토큰, 유사도 결과, 조합 매칭, 하이라이트 구간을 표현하는 데이터 클래스들.
모든 객체는 한 번의 검색 호출 안에서 생성되고 버려지는 값 객체입니다.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple


class TokenType(str, Enum):
    """토큰 문자 종류"""
    KOREAN = "korean"
    ENGLISH = "english"
    NUMBER = "number"
    SYMBOL = "symbol"
    MIXED = "mixed"


class FuzzyAlgorithm(str, Enum):
    """유사도 알고리즘 이름"""
    LEVENSHTEIN = "levenshtein"
    JARO = "jaro"
    NGRAM = "ngram"


class MatchType(str, Enum):
    """하이라이트 레벨 판정에 쓰이는 매칭 유형"""
    EXACT = "exact"
    ENTITY = "entity"
    PHRASE = "phrase"
    FUZZY = "fuzzy"


class HighlightLevel(str, Enum):
    """렌더러에 전달되는 하이라이트 레벨"""
    EXACT = "exact"
    ENTITY = "entity"
    PHRASE = "phrase"
    SIMILAR = "similar"
    RELATED = "related"
    CONTEXT = "context"


@dataclass(frozen=True)
class Token:
    """
    스마트 토큰

    Attributes:
        text: 정리된 토큰 텍스트
        type: 문자 종류 (korean, english, number, symbol, mixed)
        original: 원본 텍스트
    """
    text: str
    type: TokenType
    original: str


@dataclass(frozen=True)
class FuzzyMatchResult:
    """
    유사도 매칭 결과

    Attributes:
        is_match: 임계값 통과 여부
        confidence: 신뢰도 (0.0-1.0)
        algorithm: 사용된 알고리즘 ('exact' 또는 알고리즘 이름)
    """
    is_match: bool
    confidence: float
    algorithm: str


@dataclass(frozen=True)
class ContinuityInfo:
    """
    문서 내 연속성 정보 (보너스 점수의 근거)

    Attributes:
        has_document_continuity: 검색 토큰이 순서대로 등장하는 구간이 있는지
        proximity_score: 연속 구간 비율 합 + 문장 단위 동시 등장 보너스
        matched_sequences: 연속성으로 인정된 문서 단어 구간들
    """
    has_document_continuity: bool = False
    proximity_score: float = 0.0
    matched_sequences: Tuple[str, ...] = ()


@dataclass
class CombinationMatch:
    """
    조합 매칭 결과

    Attributes:
        tokens: 매칭에 사용된 토큰들 (검색 순서)
        matched_text: 문서에서 실제 매칭된 텍스트
        score: 최종 점수 (max_score로 제한)
        base_score: 기본 점수 (토큰 수 + 조합 보너스)
        bonus_score: 연속성/근접성 보너스 점수
        start_index: 문서 내 시작 위치 (inclusive)
        end_index: 문서 내 종료 위치 (exclusive)
        continuity: 보너스 산정 근거
    """
    tokens: List[Token]
    matched_text: str
    score: float
    base_score: float
    bonus_score: float
    start_index: int
    end_index: int
    continuity: ContinuityInfo = field(default_factory=ContinuityInfo)

    @property
    def span(self) -> Tuple[int, int]:
        return self.start_index, self.end_index

    def overlaps(self, other: "CombinationMatch") -> bool:
        """반개구간 [start, end) 겹침 여부"""
        return self.start_index < other.end_index and self.end_index > other.start_index


@dataclass
class HighlightSpan:
    """
    렌더러가 소비하는 하이라이트 구간

    Attributes:
        start_index: 시작 위치
        end_index: 종료 위치 (exclusive)
        level: 하이라이트 레벨
        score: 조합 매칭 점수
        score_class: 점수 구간 (1-6)
        confidence: 레벨 판정에 사용된 신뢰도
        match_type: 레벨 판정에 사용된 매칭 유형
        matched_text: 매칭된 텍스트
        tokens: 매칭된 토큰 텍스트
    """
    start_index: int
    end_index: int
    level: HighlightLevel
    score: float
    score_class: int
    confidence: float
    match_type: MatchType
    matched_text: str
    tokens: List[str] = field(default_factory=list)
