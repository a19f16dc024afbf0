"""
Highlight Service

문서 하이라이트 매칭 서비스.
요청별 설정(프리셋 + 환경 기본값 + overrides)을 만들고 HighlightMatchAgent를 호출합니다.
"""
import logging
from dataclasses import asdict
from typing import Any, Dict, List, Mapping, Optional

from agent.highlight import (
    HIGHLIGHT_PRESETS,
    FuzzyMatchConfig,
    HighlightConfig,
    HighlightMatchAgent,
    Token,
    add_custom_keywords,
    fuzzy_text_match,
    get_automaton_cache,
    get_preset,
    merge_highlight_config,
    smart_tokenize,
)
from app.config import Settings, settings as default_settings
from app.core.text_utils import strip_html_tags

logger = logging.getLogger(__name__)


def _token_to_dict(token: Token) -> Dict[str, Any]:
    return {"text": token.text, "type": token.type, "original": token.original}


class HighlightService:
    """
    하이라이트 매칭 서비스

    비즈니스 로직:
    1. 프리셋 선택 -> 환경 설정의 fuzzy 기본값 적용 -> 요청 overrides 적용
    2. HTML 문서는 텍스트로 변환
    3. Agent 호출 후 응답용 dict로 변환
    """

    def __init__(self, settings: Settings = default_settings):
        """서비스 초기화"""
        self.settings = settings
        self.agent = HighlightMatchAgent(
            combination_only_words=settings.combination_only_words_list,
            keyword_config=add_custom_keywords(settings.custom_keywords_list)
        )
        get_automaton_cache().resize(settings.HIGHLIGHT_AUTOMATON_CACHE_SIZE)
        logger.info(f"HighlightService initialized (default preset: {settings.HIGHLIGHT_PRESET})")

    def build_config(
        self,
        preset: Optional[str] = None,
        overrides: Optional[Mapping[str, Any]] = None
    ) -> HighlightConfig:
        """
        요청별 설정 생성

        Raises:
            HighlightConfigError: 알 수 없는 프리셋, 섹션, 필드 또는 잘못된 값
        """
        config = get_preset(preset or self.settings.HIGHLIGHT_PRESET)
        config = merge_highlight_config(config, {
            "fuzzy_match": {
                "algorithm": self.settings.HIGHLIGHT_FUZZY_ALGORITHM,
                "threshold": self.settings.HIGHLIGHT_FUZZY_THRESHOLD,
            }
        })
        return merge_highlight_config(config, overrides)

    async def match(
        self,
        document_text: str,
        search_text: str,
        preset: Optional[str] = None,
        overrides: Optional[Mapping[str, Any]] = None,
        is_html: bool = False
    ) -> Dict[str, Any]:
        """
        문서에서 검색 텍스트의 하이라이트 구간 찾기

        Args:
            document_text: 문서 텍스트 (HTML 가능)
            search_text: 검색 텍스트
            preset: 설정 프리셋 이름 (기본값: 환경 설정)
            overrides: 섹션별 설정 덮어쓰기
            is_html: document_text가 HTML인지 여부

        Returns:
            {"tokens", "matches", "spans", "total_matches", "key_terms", "phrases"}

        Raises:
            ValueError: 설정이 잘못되었거나 문서가 비어있는 경우
        """
        config = self.build_config(preset, overrides)

        if is_html:
            document_text = strip_html_tags(document_text)

        result = await self.agent.process(
            document_text,
            search_text,
            config=config,
            max_search_tokens=self.settings.HIGHLIGHT_MAX_SEARCH_TOKENS
        )

        return {
            "tokens": [_token_to_dict(t) for t in result.tokens],
            "matches": [
                {
                    "tokens": [t.text for t in m.tokens],
                    "matched_text": m.matched_text,
                    "score": m.score,
                    "base_score": m.base_score,
                    "bonus_score": m.bonus_score,
                    "start_index": m.start_index,
                    "end_index": m.end_index,
                    "has_document_continuity": m.continuity.has_document_continuity,
                    "proximity_score": m.continuity.proximity_score,
                }
                for m in result.matches
            ],
            "spans": [asdict(s) for s in result.spans],
            "total_matches": len(result.matches),
            "key_terms": result.key_terms,
            "phrases": result.phrases,
        }

    def tokenize(self, text: str) -> List[Dict[str, Any]]:
        """스마트 토큰화"""
        return [_token_to_dict(t) for t in smart_tokenize(text)]

    def similarity(
        self,
        search: str,
        target: str,
        algorithm: str = "levenshtein",
        threshold: float = 0.7,
        case_sensitive: bool = False
    ) -> Dict[str, Any]:
        """두 텍스트의 유사도 매칭 결과"""
        options = FuzzyMatchConfig(
            threshold=threshold,
            algorithm=algorithm,
            case_sensitive=case_sensitive
        )
        return asdict(fuzzy_text_match(search, target, options))

    def presets(self) -> Dict[str, Any]:
        """사용 가능한 프리셋 목록"""
        return {
            "default_preset": self.settings.HIGHLIGHT_PRESET,
            "presets": {name: asdict(config) for name, config in HIGHLIGHT_PRESETS.items()},
        }
