"""
Text processing utilities for highlight matching.
Converts HTML documents to plain text before matching.
"""
import logging
import re
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)


def strip_html_tags(html_text: str) -> str:
    """
    HTML 태그를 제거하고 순수 텍스트만 추출합니다.

    DOCX/HTML 문서 뷰어의 본문은 HTML이므로, 하이라이트 위치를
    텍스트 기준으로 계산하기 전에 태그를 제거합니다.

    Args:
        html_text: HTML이 포함된 텍스트

    Returns:
        HTML 태그가 제거된 순수 텍스트

    Example:
        >>> html = "<p>가계 대출</p><div><strong>CSS대출</strong> 적용</div>"
        >>> print(strip_html_tags(html))
        가계 대출
        CSS대출
        적용

    Notes:
        - BeautifulSoup4로 HTML 파싱
        - 여러 공백/줄바꿈을 하나로 정리
        - 빈 줄과 각 줄의 앞뒤 공백 제거
    """
    if not html_text or not html_text.strip():
        return ""

    try:
        soup = BeautifulSoup(html_text, 'html.parser')

        # 스크립트/스타일 내용은 문서 텍스트가 아님
        for tag in soup(['script', 'style']):
            tag.decompose()

        text = soup.get_text(separator='\n')

        text = re.sub(r'\n{3,}', '\n\n', text)
        text = re.sub(r'[ \t]{2,}', ' ', text)

        lines = [line.strip() for line in text.split('\n')]
        text = '\n'.join(line for line in lines if line)

        return text.strip()

    except Exception as e:
        logger.warning(f"Failed to strip HTML tags: {str(e)}, returning original text")
        return html_text
