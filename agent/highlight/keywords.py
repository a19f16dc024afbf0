"""
하이라이트 키워드 유틸리티

- 하이라이트에서 제외할 단어 목록
- 중요 키워드 패턴 (신용등급, 금액, 대출 유형, 복합 키워드, 사용자 정의)
- 조합에서만 의미 있는 단어 판정 (예: "이하", "초과")
- 검색 텍스트 태그 제거 및 단어 필터링
"""

import re
from dataclasses import dataclass, field, replace
from typing import Callable, Iterable, List, Optional, Pattern, Tuple

from .models import Token

# 하이라이팅에서 제외할 단어들 (불용어, 일반적인 단어, 특수문자 등)
EXCLUDED_WORDS = frozenset([
    # 한국어 조사/어미
    '은', '는', '이', '가', '을', '를', '에', '에서', '으로', '로', '와', '과', '의', '도', '만', '에게', '한테', '께',
    '서', '부터', '까지', '보다', '처럼', '같이', '마다', '조차', '라도', '이나', '나', '든지', '거나',
    '다', '이다', '었다', '았다', '했다', '겠다', '네요', '어요', '아요',

    # 한국어 일반 단어
    '것', '수', '때', '곳', '점', '면', '경우', '그', '저', '그것', '이것', '저것', '여기', '거기', '저기',
    '누구', '무엇', '어디', '언제', '어떻게', '왜', '얼마', '몇', '어느', '어떤',
    '하다', '되다', '있다', '없다', '오다', '가다', '주다', '받다', '말하다', '생각하다',
    '위', '아래', '앞', '뒤', '옆', '안', '밖', '속', '밑', '사이', '근처', '주변',
    '그리고', '또는', '하지만', '그러나', '따라서', '그래서', '또한', '즉',

    # 영어 불용어
    'the', 'a', 'an', 'and', 'or', 'but', 'in', 'on', 'at', 'to', 'for', 'of', 'with', 'by', 'from', 'up',
    'about', 'into', 'through', 'during',
    'is', 'are', 'was', 'were', 'be', 'been', 'being', 'have', 'has', 'had', 'do', 'does', 'did', 'will',
    'would', 'should', 'could', 'can', 'may', 'might', 'must',
    'i', 'you', 'he', 'she', 'it', 'we', 'they', 'me', 'him', 'her', 'us', 'them', 'my', 'your', 'his',
    'its', 'our', 'their',
    'this', 'that', 'these', 'those', 'here', 'there', 'when', 'where', 'why', 'how', 'what', 'which',
    'who', 'whom', 'whose',
    'all', 'any', 'both', 'each', 'few', 'more', 'most', 'other', 'some', 'such', 'no', 'nor', 'not',
    'only', 'own', 'same', 'so', 'than', 'too', 'very',
    'one', 'two', 'first', 'second',

    # HTML 엔티티 및 특수문자
    'nbsp', 'amp', 'lt', 'gt', 'quot', 'apos',
    '·', ':', ';', '(', ')', '[', ']', '{', '}', '<', '>', '@', '#', '$', '%', '^', '&', '`', '-',

    # 일반적인 서술/단위 단어
    '입니다', '합니다', '습니다', '됩니다', '있습니다', '없습니다',
    '개', '번', '차', '회', '건', '명', '분', '초', '시간', '일', '월', '년',
    '관련', '해당', '다음', '이전', '현재', '기존', '새로운', '추가', '변경', '삭제',
    '사용', '이용', '활용', '적용', '실시', '진행', '완료', '시작', '종료',
    # 금융 문서 일반 단어 ('이상', '이하', '초과', '미만'은 중요하므로 제외하지 않음)
    '포함', '제외', '기준', '등급', '비고', '구분', '분류',
])

# 단독으로는 의미가 약하고 조합에서만 의미 있는 범위 표현
COMBINATION_ONLY_WORDS = frozenset(['이하', '초과', '미만', '이상'])

_WORD_SPLIT = re.compile(r"[\s,.\-!?;:()\[\]{}\"'«»„‚“”‘’|~]+")
_PURE_SYMBOLS = re.compile(r"^[^\w가-힯㄰-㆏]+$")
_PURE_DIGITS = re.compile(r"^\d+$")
_AMOUNT_UNIT = re.compile(r"억|만|원")


@dataclass(frozen=True)
class ImportantKeywordConfig:
    """
    문서 유형별 중요 키워드 패턴

    Attributes:
        credit_ratings: 신용등급 (AAA, AA+, BB-, CCC 등)
        amounts: 금액 (25억, 100만원, 2,400만원 등)
        loan_types: 대출 유형 (신용대출, 담보대출 등)
        composite_terms: 복합 키워드 (비적용, 재심사 등)
        custom_keywords: 사용자 정의 키워드 (소문자)
    """
    credit_ratings: Pattern = re.compile(
        r"^(AAA|AA\+|AA-?|A\+|A-?|BBB\+|BBB-?|BB\+|BB-?|CCC\+?|CC\+?|C|D)$", re.IGNORECASE
    )
    amounts: Pattern = re.compile(r"^(\d{1,3}(?:[,.]?\d{3})*(?:억|만|천)?원?)$", re.IGNORECASE)
    loan_types: Pattern = re.compile(
        r"^(신용대출|담보대출|주택담보대출|전세자금대출|가계대출|기업대출|CSS대출)$", re.IGNORECASE
    )
    composite_terms: Pattern = re.compile(
        r"^(가계CSS대출|비적용|재심사|대상|여신제외|할인어음|특수이해관계인|금액포함)$", re.IGNORECASE
    )
    custom_keywords: Tuple[str, ...] = field(default_factory=tuple)


DEFAULT_IMPORTANT_KEYWORDS = ImportantKeywordConfig()


def is_important_keyword(
    keyword: str,
    config: ImportantKeywordConfig = DEFAULT_IMPORTANT_KEYWORDS
) -> bool:
    """키워드가 중요 패턴에 해당하는지 판단"""
    if not keyword or not keyword.strip():
        return False

    normalized = keyword.strip()
    return bool(
        config.credit_ratings.match(normalized)
        or config.amounts.match(normalized)
        or config.loan_types.match(normalized)
        or config.composite_terms.match(normalized)
        or normalized.lower() in config.custom_keywords
    )


def add_custom_keywords(
    keywords: Iterable[str],
    config: ImportantKeywordConfig = DEFAULT_IMPORTANT_KEYWORDS
) -> ImportantKeywordConfig:
    """사용자 정의 키워드를 추가한 새 설정 반환 (중복 제거, 순서 유지)"""
    merged = dict.fromkeys(config.custom_keywords)
    merged.update(dict.fromkeys(k.lower() for k in keywords if k and k.strip()))
    return replace(config, custom_keywords=tuple(merged))


def combination_only_predicate(
    words: Iterable[str] = COMBINATION_ONLY_WORDS
) -> Callable[[Token], bool]:
    """
    조합 전용 단어 판정 함수 생성

    반환된 함수는 토큰 텍스트가 주어진 단어 집합에 있는지 대소문자 무시로 확인합니다.
    """
    word_set = frozenset(w.lower() for w in words)

    def is_combination_only(token: Token) -> bool:
        return token.text.lower() in word_set

    return is_combination_only


def remove_tags_and_content(text: str) -> str:
    """
    텍스트에서 특정 태그와 그 내용을 제거

    <think>, <tooluselog>, <tooloutputlog> 블록은 내용까지 제거하고,
    나머지 태그는 태그만 제거한 뒤 공백을 정리합니다.
    """
    if not text:
        return ""

    cleaned = re.sub(r"<think>[\s\S]*?</think>", "", text, flags=re.IGNORECASE)
    cleaned = re.sub(r"<tooluselog>[\s\S]*?</tooluselog>", "", cleaned, flags=re.IGNORECASE)
    cleaned = re.sub(r"<tooloutputlog>[\s\S]*?</tooloutputlog>", "", cleaned, flags=re.IGNORECASE)
    cleaned = re.sub(r"<[^>]*>", "", cleaned)

    return re.sub(r"\s+", " ", cleaned).strip()


def split_words(text: str) -> List[str]:
    """구두점/따옴표/공백 기준 단어 분할"""
    return [w for w in _WORD_SPLIT.split(text) if w]


def filter_highlight_words(
    text: str,
    config: Optional[ImportantKeywordConfig] = None
) -> List[str]:
    """
    하이라이팅 대상 단어 필터링

    중요 키워드는 길이와 무관하게 유지하고, 그 외에는
    2글자 미만, 제외 단어, 단위 없는 순수 숫자, 특수문자만인 단어를 제거합니다.
    """
    config = config or DEFAULT_IMPORTANT_KEYWORDS
    words = split_words(remove_tags_and_content(text))

    result = []
    for word in words:
        if is_important_keyword(word, config):
            result.append(word)
            continue
        if len(word) < 2:
            continue
        if word.lower() in EXCLUDED_WORDS:
            continue
        if _PURE_DIGITS.match(word) and not _AMOUNT_UNIT.search(word):
            continue
        if _PURE_SYMBOLS.match(word):
            continue
        result.append(word)

    return result
