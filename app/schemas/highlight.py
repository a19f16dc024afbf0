"""
Pydantic schemas for highlight API requests and responses.
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from agent.highlight.models import FuzzyAlgorithm, HighlightLevel, MatchType, TokenType


class HighlightMatchRequest(BaseModel):
    """하이라이트 매칭 요청 스키마."""
    document_text: str = Field(..., description="문서 전체 텍스트 (is_html=true면 HTML)")
    search_text: str = Field(..., description="검색 텍스트 (답변 출처 문구 등)")
    preset: Optional[str] = Field(None, description="설정 프리셋 (strict/balanced/permissive)")
    overrides: Optional[Dict[str, Dict[str, Any]]] = Field(
        None, description="섹션별 설정 덮어쓰기 (예: {\"scoring\": {\"min_score\": 2}})"
    )
    is_html: bool = Field(False, description="document_text가 HTML인지 여부")

    class Config:
        json_schema_extra = {
            "example": {
                "document_text": "가계 대출 CSS대출 적용 가계 CSS 대출 비적용",
                "search_text": "가계CSS대출",
                "preset": "strict",
                "is_html": False
            }
        }


class TokenSchema(BaseModel):
    """스마트 토큰."""
    text: str
    type: TokenType
    original: str


class CombinationMatchSchema(BaseModel):
    """조합 매칭 결과."""
    tokens: List[str]
    matched_text: str
    score: float
    base_score: float
    bonus_score: float
    start_index: int
    end_index: int
    has_document_continuity: bool
    proximity_score: float


class HighlightSpanSchema(BaseModel):
    """렌더러용 하이라이트 구간."""
    start_index: int = Field(..., description="시작 인덱스 (0-based)")
    end_index: int = Field(..., description="끝 인덱스 (exclusive)")
    level: HighlightLevel
    score: float
    score_class: int = Field(..., ge=1, le=6)
    confidence: float = Field(..., ge=0.0, le=1.0)
    match_type: MatchType
    matched_text: str
    tokens: List[str]


class HighlightMatchResponse(BaseModel):
    """하이라이트 매칭 응답 스키마."""
    tokens: List[TokenSchema]
    matches: List[CombinationMatchSchema]
    spans: List[HighlightSpanSchema]
    total_matches: int
    key_terms: List[str] = Field(default_factory=list, description="하이라이트 대상 검색 단어")
    phrases: List[str] = Field(default_factory=list, description="검색 텍스트에서 추출한 구문")


class TokenizeRequest(BaseModel):
    """토큰화 요청 스키마."""
    text: str


class TokenizeResponse(BaseModel):
    """토큰화 응답 스키마."""
    tokens: List[TokenSchema]


class SimilarityRequest(BaseModel):
    """유사도 계산 요청 스키마."""
    search: str = Field(..., description="검색어")
    target: str = Field(..., description="대상 텍스트")
    algorithm: FuzzyAlgorithm = FuzzyAlgorithm.LEVENSHTEIN
    threshold: float = Field(0.7, ge=0.0, le=1.0)
    case_sensitive: bool = False


class SimilarityResponse(BaseModel):
    """유사도 계산 응답 스키마."""
    is_match: bool
    confidence: float
    algorithm: str


class PresetsResponse(BaseModel):
    """프리셋 목록 응답 스키마."""
    default_preset: str
    presets: Dict[str, Dict[str, Any]]
