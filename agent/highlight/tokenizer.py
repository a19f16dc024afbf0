"""
스마트 토큰화

언어 경계를 인식하여 검색 텍스트를 의미 있는 토큰으로 분할합니다.

예시:
    "가계CSS대출"     -> ["가계", "CSS", "대출"]
    "0.2억"          -> ["0.2억"] (숫자+단위는 유지)
    "1,000만원 이하"  -> ["1,000만원", "이하"]
"""

import re
from typing import List, Optional

from .models import Token, TokenType

# 한국어 조사/어미 및 일반 불용어
KOREAN_STOPWORDS = frozenset([
    # 조사
    '은', '는', '이', '가', '을', '를', '에', '에서', '으로', '로', '와', '과', '의', '도', '만', '에게', '한테', '께',
    '서', '부터', '까지', '보다', '처럼', '같이', '마다', '조차', '라도', '이나', '나', '든지', '거나',
    # 어미
    '다', '이다', '었다', '았다', '했다', '겠다', '네요', '어요', '아요',
    # 일반 불용어
    '및', '등', '기타',
])

# 제거할 특수문자 (쉼표와 마침표는 숫자 토큰을 위해 유지)
SPECIAL_CHARS = re.compile(r"[|\-()\[\]{};:!?'\"~`@#$%^&*+=<>/\\]")

# 숫자 뒤에 붙는 한국어 크기/단위 접미사
NUMERIC_UNIT_SUFFIX = re.compile(r"^[억만천원위]+$")

_KOREAN_CHAR = re.compile(r"[가-힣ㄱ-ㅎㅏ-ㅣ]")
_ENGLISH_CHAR = re.compile(r"[a-zA-Z]")
_NUMBER_CHAR = re.compile(r"[0-9.,]")
_DIGIT = re.compile(r"[0-9]")
_WORD_CHAR = re.compile(r"[가-힣ㄱ-ㅎㅏ-ㅣa-zA-Z0-9]")


def get_character_type(char: str) -> TokenType:
    """문자 종류 판별"""
    if _KOREAN_CHAR.match(char):
        return TokenType.KOREAN
    if _ENGLISH_CHAR.match(char):
        return TokenType.ENGLISH
    if _NUMBER_CHAR.match(char):
        return TokenType.NUMBER
    return TokenType.SYMBOL


def _make_token(text: str, token_type: TokenType) -> Optional[Token]:
    text = text.strip()
    # 구두점만 남은 조각("," 등)은 토큰이 아님
    if not _WORD_CHAR.search(text):
        return None
    return Token(text=text, type=token_type, original=text)


def split_by_language_boundary(word: str) -> List[Token]:
    """
    언어 경계로 단어 분할

    같은 종류의 연속 문자는 하나의 토큰으로 묶고, 종류가 바뀌면 새 토큰을 시작합니다.
    단, 숫자 뒤의 나머지가 모두 단위 문자(억/만/천/원/위)이면
    숫자와 단위를 합쳐 하나의 mixed 토큰으로 유지합니다.

    Example:
        >>> [t.text for t in split_by_language_boundary("가계CSS대출")]
        ['가계', 'CSS', '대출']
    """
    tokens: List[Token] = []
    current_text = ""
    current_type: Optional[TokenType] = None

    for i, char in enumerate(word):
        char_type = get_character_type(char)
        # 쉼표/마침표는 숫자 뒤에서만 숫자의 일부 ("1,000", "0.2")
        if char_type == TokenType.NUMBER and current_type != TokenType.NUMBER and not _DIGIT.match(char):
            char_type = TokenType.SYMBOL

        # 숫자 + 한국어 단위 (예: "0.2억", "1만") - 분리하지 않음
        if current_type == TokenType.NUMBER and char_type == TokenType.KOREAN:
            remaining = word[i:]
            if NUMERIC_UNIT_SUFFIX.match(remaining):
                token = _make_token(current_text + remaining, TokenType.MIXED)
                if token:
                    tokens.append(token)
                return tokens

        if current_type is None or current_type == char_type:
            current_text += char
            current_type = char_type
            continue

        token = _make_token(current_text, current_type)
        if token:
            tokens.append(token)
        current_text = char
        current_type = char_type

    token = _make_token(current_text, current_type or TokenType.MIXED)
    if token:
        tokens.append(token)

    return tokens


def smart_tokenize(text: str) -> List[Token]:
    """
    언어 경계 기반 스마트 토큰화

    처리 순서:
        1. 특수문자 제거 (쉼표/마침표 유지)
        2. 공백 정리 후 단어 분할, 단어 앞뒤의 쉼표/마침표 제거
        3. 불용어 제거 (대소문자 무시)
        4. 각 단어를 언어 경계로 세분화

    Args:
        text: 검색 텍스트

    Returns:
        토큰 리스트 (검색 순서 유지)
    """
    if not text or not text.strip():
        return []

    clean_text = SPECIAL_CHARS.sub(" ", text)
    words = [word.strip(".,") for word in clean_text.split()]

    tokens: List[Token] = []
    for word in words:
        if not word or word.lower() in KOREAN_STOPWORDS:
            continue
        tokens.extend(split_by_language_boundary(word))

    return tokens
