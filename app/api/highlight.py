"""
Highlight API 엔드포인트

문서 뷰어용 검색 문구 하이라이트 매칭 API
Handles routing and validation only - business logic is in HighlightService.
"""
from fastapi import APIRouter, HTTPException
from typing import Optional
import logging

from app.schemas.highlight import (
    HighlightMatchRequest,
    HighlightMatchResponse,
    PresetsResponse,
    SimilarityRequest,
    SimilarityResponse,
    TokenizeRequest,
    TokenizeResponse,
)
from app.services.highlight_service import HighlightService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/highlight")


# 서비스 인스턴스
_service: Optional[HighlightService] = None


def get_service() -> HighlightService:
    """서비스 싱글톤 인스턴스"""
    global _service
    if _service is None:
        _service = HighlightService()
    return _service


@router.post("/match", response_model=HighlightMatchResponse)
async def match_highlights(request: HighlightMatchRequest):
    """
    문서에서 검색 텍스트의 하이라이트 구간 찾기

    1. 검색 텍스트 스마트 토큰화 ("가계CSS대출" -> 가계, CSS, 대출)
    2. 단일/조합 토큰 매칭 + 연속성 점수 + 겹침 제거
    3. 레벨 판정 후 과다 하이라이트 제한

    Example:
        >>> POST /api/ai/highlight/match
        >>> {"document_text": "가계 CSS 대출 비적용", "search_text": "가계CSS대출"}
        >>> Response: {"tokens": [...], "matches": [...], "spans": [...], "total_matches": 1}
    """
    try:
        service = get_service()
        result = await service.match(
            document_text=request.document_text,
            search_text=request.search_text,
            preset=request.preset,
            overrides=request.overrides,
            is_html=request.is_html
        )
        return HighlightMatchResponse(**result)

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Highlight match failed: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"하이라이트 매칭 실패: {str(e)}")


@router.post("/tokenize", response_model=TokenizeResponse)
async def tokenize(request: TokenizeRequest):
    """검색 텍스트 스마트 토큰화 결과 확인"""
    try:
        return TokenizeResponse(tokens=get_service().tokenize(request.text))

    except Exception as e:
        logger.error(f"Tokenize failed: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"토큰화 실패: {str(e)}")


@router.post("/similarity", response_model=SimilarityResponse)
async def similarity(request: SimilarityRequest):
    """두 텍스트의 유사도 매칭 결과 계산"""
    try:
        result = get_service().similarity(
            search=request.search,
            target=request.target,
            algorithm=request.algorithm,
            threshold=request.threshold,
            case_sensitive=request.case_sensitive
        )
        return SimilarityResponse(**result)

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Similarity failed: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"유사도 계산 실패: {str(e)}")


@router.get("/presets", response_model=PresetsResponse)
async def list_presets():
    """사용 가능한 설정 프리셋 목록"""
    return PresetsResponse(**get_service().presets())
