"""
검색 텍스트 전처리

구문 추출, 패턴 기반 개체명 인식, 텍스트 중요도 계산을 제공합니다.
하이라이트 레벨 판정 시 entity 여부를 결정하는 데 사용됩니다.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from .config import TextProcessingConfig
from .keywords import EXCLUDED_WORDS, remove_tags_and_content, split_words

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NamedEntity:
    """
    인식된 개체명

    Attributes:
        text: 개체명 텍스트
        type: person, organization, location, technical, concept
        confidence: 신뢰도
    """
    text: str
    type: str
    confidence: float


@dataclass
class ProcessedText:
    """전처리 결과"""
    key_terms: List[str] = field(default_factory=list)
    phrases: List[str] = field(default_factory=list)
    entities: List[NamedEntity] = field(default_factory=list)
    importance: float = 0.0


# 기술적 맥락에서는 불용어라도 유지할 단어
TECHNICAL_EXCEPTIONS = frozenset(['data', 'system', 'model', 'api', 'service', 'component'])

_ENTITY_PATTERNS = [
    # 한국어 조직명
    ("organization", 0.8, re.compile(r"([가-힣]+)(?:회사|기업|그룹|코퍼레이션|주식회사|유한회사)")),
    ("organization", 0.8, re.compile(r"([가-힣]+)(?:대학교|대학|학교|연구소|연구원|센터)")),
    ("organization", 0.8, re.compile(r"([가-힣]+)(?:부|과|팀|실|국|청|원|소)")),
    # 영어 조직명
    ("organization", 0.9, re.compile(
        r"\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*)\s+"
        r"(?:Inc|Corp|Ltd|LLC|Company|Corporation|University|Institute|Center)\b"
    )),
    ("organization", 0.9, re.compile(r"\b(?:Google|Microsoft|Apple|Amazon|Meta|Tesla|OpenAI|Anthropic)\b")),
    # 기술 용어
    ("technical", 0.95, re.compile(
        r"\b(?:API|REST|GraphQL|JSON|XML|HTTP|HTTPS|URL|URI|SDK|CLI|GUI|UI|UX|AI|ML|DL|NLP|LLM|GPT|BERT)\b"
    )),
    ("technical", 0.95, re.compile(
        r"(?<!\w)(?:React|Vue|Angular|Node\.js|Python|JavaScript|TypeScript|Java|Go|Rust|C\+\+"
        r"|SQL|NoSQL|MongoDB|PostgreSQL|MySQL)(?!\w)"
    )),
    ("technical", 0.95, re.compile(
        r"\b(?:Docker|Kubernetes|AWS|Azure|GCP|Lambda|Serverless|Microservice|Database|Cache|Redis|Elasticsearch)\b"
    )),
]


def context_aware_stopword_filter(words: List[str], context: str = "") -> List[str]:
    """
    문맥을 고려한 불용어 필터링

    - 불용어라도 기술적 맥락(technical/system/api)에서는 기술 단어를 유지
    - 2글자 미만, 50글자 초과 단어 제거
    - 순수 숫자는 연도(1900-2030) 또는 페이지 문맥에서만 유지
    - 특수문자만인 단어 제거
    """
    context_lower = context.lower()
    technical_context = any(k in context_lower for k in ("technical", "system", "api"))
    page_context = "page" in context_lower or "페이지" in context_lower

    result = []
    for word in words:
        word_lower = word.lower()

        if word_lower in EXCLUDED_WORDS:
            if word_lower in TECHNICAL_EXCEPTIONS and technical_context:
                result.append(word)
            continue

        if len(word) < 2 or len(word) > 50:
            continue

        if word.isdigit():
            if 1900 < int(word) < 2030 or page_context:
                result.append(word)
            continue

        if not any(ch.isalnum() for ch in word):
            continue

        result.append(word)

    return result


def _is_phrase_valid(phrase: str) -> bool:
    words = phrase.split(" ")
    if all(w.lower() in EXCLUDED_WORDS for w in words):
        return False
    return any(len(w) > 2 and w.lower() not in EXCLUDED_WORDS for w in words)


def extract_phrases(text: str, min_words: int = 2, max_words: int = 5) -> List[str]:
    """
    n단어 구문 추출 (중복 제거, 등장 순서 유지)

    모든 단어가 불용어인 구문과 의미 있는 단어(3글자 이상)가 없는 구문은 제외합니다.
    """
    words = split_words(remove_tags_and_content(text))
    phrases = []

    for n in range(min_words, min(max_words, len(words)) + 1):
        for i in range(len(words) - n + 1):
            phrase = " ".join(words[i:i + n])
            if _is_phrase_valid(phrase):
                phrases.append(phrase)

    return list(dict.fromkeys(phrases))


def basic_named_entity_recognition(text: str) -> List[NamedEntity]:
    """
    패턴 기반 개체명 인식

    같은 텍스트(대소문자 무시)는 신뢰도가 높은 것만 남기고,
    신뢰도 내림차순으로 반환합니다.
    """
    cleaned = remove_tags_and_content(text)
    best = {}

    for entity_type, confidence, pattern in _ENTITY_PATTERNS:
        for match in pattern.finditer(cleaned):
            entity = NamedEntity(text=match.group(0), type=entity_type, confidence=confidence)
            key = entity.text.lower()
            existing = best.get(key)
            if existing is None or existing.confidence < entity.confidence:
                best[key] = entity

    return sorted(best.values(), key=lambda e: e.confidence, reverse=True)


def calculate_text_importance(text: str) -> float:
    """
    텍스트 중요도 (0.0-1.0)

    길이 점수(0.3) + 개체명 점수(0.4) + 기술 용어 밀도 점수(0.3)
    """
    cleaned = remove_tags_and_content(text)

    length_score = min(len(cleaned) / 100, 1.0) * 0.3

    entities = basic_named_entity_recognition(cleaned)
    entity_score = min(len(entities) / 5, 1.0) * 0.4

    technical_terms = sum(1 for e in entities if e.type == "technical")
    technical_score = min(technical_terms / 3, 1.0) * 0.3

    return min(length_score + entity_score + technical_score, 1.0)


def process_text_for_highlighting(
    text: str,
    context: str = "",
    options: Optional[TextProcessingConfig] = None
) -> ProcessedText:
    """
    검색 텍스트 전처리 메인 함수

    Args:
        text: 검색 텍스트
        context: 필터링 판단용 문맥
        options: 전처리 설정 (기본값: TextProcessingConfig())

    Returns:
        ProcessedText (핵심 단어, 구문, 개체명, 중요도)
    """
    options = options or TextProcessingConfig()
    cleaned = remove_tags_and_content(text)

    raw_words = [
        w for w in split_words(cleaned)
        if options.min_term_length <= len(w) <= options.max_term_length
    ]
    key_terms = context_aware_stopword_filter(raw_words, context)

    phrases = (
        extract_phrases(cleaned, options.phrase_min_words, options.phrase_max_words)
        if options.enable_phrase_extraction else []
    )
    entities = (
        basic_named_entity_recognition(cleaned)
        if options.enable_entity_recognition else []
    )

    processed = ProcessedText(
        key_terms=key_terms,
        phrases=phrases,
        entities=entities,
        importance=calculate_text_importance(cleaned),
    )
    logger.debug(
        f"Text processed: {len(key_terms)} terms, {len(phrases)} phrases, "
        f"{len(entities)} entities, importance={processed.importance:.2f}"
    )
    return processed
