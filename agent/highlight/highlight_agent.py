"""
하이라이트 매칭 Agent (Highlight Match Agent)

검색 텍스트를 문서에서 찾아 하이라이트 구간을 만드는 Micro Agent.
단일 책임: 문서 텍스트 + 검색 텍스트 -> 레벨이 부여된 하이라이트 구간

처리 흐름:
    검색 텍스트 -> 스마트 토큰화 -> 조합 매칭 탐색
    -> 신뢰도/레벨 판정 -> 과다 하이라이트 제한 -> 위치순 구간

재사용 시나리오:
- 문서 뷰어: 채팅 답변의 출처 문구 하이라이트
- 검색 결과: 문서 내 검색어 근사 위치 표시
"""

from dataclasses import dataclass, field
from typing import Iterable, List
import logging

from agent.base_agent import BaseAgent
from .combination_matcher import find_combination_matches
from .config import (
    DEFAULT_HIGHLIGHT_CONFIG,
    HighlightConfig,
    TextProcessingConfig,
    determine_highlight_level,
    score_class,
)
from .fuzzy_matcher import fuzzy_text_match
from .keywords import (
    COMBINATION_ONLY_WORDS,
    DEFAULT_IMPORTANT_KEYWORDS,
    ImportantKeywordConfig,
    combination_only_predicate,
    filter_highlight_words,
    is_important_keyword,
    remove_tags_and_content,
)
from .models import CombinationMatch, HighlightSpan, MatchType, Token
from .text_processor import process_text_for_highlighting
from .tokenizer import smart_tokenize

logger = logging.getLogger(__name__)


@dataclass
class HighlightResult:
    """
    하이라이트 매칭 결과

    Attributes:
        tokens: 검색 텍스트 토큰
        matches: 겹치지 않는 조합 매칭 (점수 내림차순)
        spans: 렌더러용 구간 (위치순, 과다 하이라이트 제한 적용)
        key_terms: 하이라이트 대상 검색 단어 (제외 단어 제거, 중요 키워드 유지)
        phrases: 검색 텍스트에서 추출한 구문 (text_processing.enable_phrase_extraction)
    """
    tokens: List[Token] = field(default_factory=list)
    matches: List[CombinationMatch] = field(default_factory=list)
    spans: List[HighlightSpan] = field(default_factory=list)
    key_terms: List[str] = field(default_factory=list)
    phrases: List[str] = field(default_factory=list)


def _strip_whitespace(text: str) -> str:
    return "".join(text.split())


class HighlightMatchAgent(BaseAgent):
    """
    문서에서 검색 문구의 근사 위치를 찾는 Agent

    예시:
        >>> agent = HighlightMatchAgent()
        >>> result = await agent.process(
        ...     "가계 대출 CSS대출 적용 가계 CSS 대출 비적용",
        ...     "가계CSS대출"
        ... )
        >>> result.matches[0].matched_text
        '가계 CSS 대출'

    Note:
        외부 API를 호출하지 않는 순수 계산이며, 설정 객체는 공유해도 안전합니다.
    """

    def __init__(
        self,
        combination_only_words: Iterable[str] = COMBINATION_ONLY_WORDS,
        keyword_config: ImportantKeywordConfig = DEFAULT_IMPORTANT_KEYWORDS
    ):
        """
        Args:
            combination_only_words: 단독으로는 약하고 조합에서만 의미 있는 단어들
            keyword_config: entity 판정에 쓰는 중요 키워드 패턴
        """
        super().__init__()
        self._is_combination_only = combination_only_predicate(combination_only_words)
        self._keyword_config = keyword_config

    async def process(
        self,
        document_text: str,
        search_text: str,
        config: HighlightConfig = DEFAULT_HIGHLIGHT_CONFIG,
        max_search_tokens: int = 0
    ) -> HighlightResult:
        """
        문서에서 검색 텍스트의 하이라이트 구간 찾기

        Args:
            document_text: 문서 전체 텍스트
            search_text: 검색 텍스트 (자유 형식)
            config: 하이라이트 설정
            max_search_tokens: 토큰 수 상한 (0이면 제한 없음)

        Returns:
            HighlightResult

        Raises:
            ValueError: 문서 텍스트가 비어있는 경우
        """
        return self.match(document_text, search_text, config, max_search_tokens)

    def match(
        self,
        document_text: str,
        search_text: str,
        config: HighlightConfig = DEFAULT_HIGHLIGHT_CONFIG,
        max_search_tokens: int = 0
    ) -> HighlightResult:
        """process()의 동기 버전"""
        if not document_text or not document_text.strip():
            raise ValueError("문서 텍스트가 비어있습니다")

        cleaned_search = remove_tags_and_content(search_text or "")
        processed = process_text_for_highlighting(cleaned_search, options=config.text_processing)
        tokens = self._filter_tokens(smart_tokenize(cleaned_search), config.text_processing)

        if not tokens:
            if cleaned_search:
                logger.warning(f"No searchable tokens in search text: {cleaned_search[:50]!r}")
            return HighlightResult()

        if max_search_tokens and len(tokens) > max_search_tokens:
            logger.warning(f"Search tokens capped: {len(tokens)} -> {max_search_tokens}")
            tokens = tokens[:max_search_tokens]

        logger.info(f"Highlight matching started: {len(tokens)} tokens, {len(document_text)} chars")

        matches = find_combination_matches(
            document_text,
            tokens,
            config=config.scoring,
            continuity_config=config.continuity,
            is_combination_only=self._is_combination_only
        )

        entity_texts = {e.text.lower() for e in processed.entities}

        phrase_key = _strip_whitespace("".join(t.text for t in tokens))
        spans = [
            self._to_span(match, phrase_key, entity_texts, config)
            for match in matches
        ]
        spans = self._apply_priority_budget(spans, len(document_text), config)

        logger.info(f"Highlight matching completed: {len(matches)} matches, {len(spans)} spans")

        return HighlightResult(
            tokens=tokens,
            matches=matches,
            spans=spans,
            key_terms=filter_highlight_words(cleaned_search, self._keyword_config),
            phrases=processed.phrases
        )

    def _filter_tokens(self, tokens: List[Token], options: TextProcessingConfig) -> List[Token]:
        """길이 범위를 벗어난 토큰 제거 (중요 키워드는 길이와 무관하게 유지)"""
        kept = [
            t for t in tokens
            if options.min_term_length <= len(t.text) <= options.max_term_length
            or is_important_keyword(t.text, self._keyword_config)
        ]
        if len(kept) < len(tokens):
            logger.debug(f"Search tokens filtered by length: {len(tokens)} -> {len(kept)}")
        return kept

    def _confidence(self, phrase_key: str, match: CombinationMatch, config: HighlightConfig) -> float:
        if not config.fuzzy_match.enabled:
            return min(match.score / config.scoring.max_score, 1.0) if config.scoring.max_score else 0.0

        result = fuzzy_text_match(
            phrase_key,
            _strip_whitespace(match.matched_text),
            config.fuzzy_match
        )
        return result.confidence

    def _match_type(self, match: CombinationMatch, entity_texts: set) -> MatchType:
        matched = match.matched_text.strip()
        if matched.lower() in entity_texts or is_important_keyword(matched, self._keyword_config):
            return MatchType.ENTITY
        if len(match.tokens) > 1:
            return MatchType.PHRASE
        return MatchType.FUZZY

    def _to_span(
        self,
        match: CombinationMatch,
        phrase_key: str,
        entity_texts: set,
        config: HighlightConfig
    ) -> HighlightSpan:
        confidence = self._confidence(phrase_key, match, config)
        match_type = self._match_type(match, entity_texts)

        return HighlightSpan(
            start_index=match.start_index,
            end_index=match.end_index,
            level=determine_highlight_level(confidence, match_type, config.thresholds),
            score=match.score,
            score_class=score_class(match.score),
            confidence=round(confidence, 4),
            match_type=match_type,
            matched_text=match.matched_text,
            tokens=[t.text for t in match.tokens]
        )

    def _apply_priority_budget(
        self,
        spans: List[HighlightSpan],
        document_length: int,
        config: HighlightConfig
    ) -> List[HighlightSpan]:
        """
        과다 하이라이트 방지

        점수 높은 순으로 max_highlight_ratio x 문서 길이 안에 들어가는 구간만 남기고,
        max_highlights 개수를 넘지 않게 제한한 뒤 위치순으로 정렬합니다.
        """
        priority = config.priority
        allowed_length = int(document_length * priority.max_highlight_ratio)

        kept: List[HighlightSpan] = []
        for span in sorted(spans, key=lambda s: s.score, reverse=True):
            if priority.max_highlights and len(kept) >= priority.max_highlights:
                break
            length = span.end_index - span.start_index
            if length <= allowed_length:
                kept.append(span)
                allowed_length -= length

        if len(kept) < len(spans):
            logger.warning(f"Highlight budget applied: {len(spans)} -> {len(kept)} spans")

        kept.sort(key=lambda s: s.start_index)
        return kept
