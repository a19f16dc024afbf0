"""
문자열 유사도 알고리즘

세 가지 교체 가능한 지표를 제공합니다. 모두 상태가 없는 순수 함수이며
(str, str) -> 0.0 ~ 1.0 범위의 유사도를 반환합니다.

- Levenshtein: 편집 거리 기반 유사도
- Jaro: 윈도우 내 일치 문자와 전위(transposition) 기반 유사도
- N-gram: n-gram 집합의 Jaccard 유사도
"""

from typing import List


def levenshtein_distance(text1: str, text2: str) -> int:
    """
    Levenshtein 편집 거리 계산

    삽입/삭제/치환 비용은 모두 1입니다.

    Example:
        >>> levenshtein_distance("대출", "대출금")
        1

    Time Complexity: O(N x M)
    """
    len1, len2 = len(text1), len(text2)

    if len1 == 0:
        return len2
    if len2 == 0:
        return len1

    # DP 테이블
    dp = [[0] * (len2 + 1) for _ in range(len1 + 1)]

    for i in range(len1 + 1):
        dp[i][0] = i
    for j in range(len2 + 1):
        dp[0][j] = j

    for i in range(1, len1 + 1):
        for j in range(1, len2 + 1):
            if text1[i - 1] == text2[j - 1]:
                dp[i][j] = dp[i - 1][j - 1]
            else:
                dp[i][j] = min(
                    dp[i - 1][j] + 1,      # 삭제
                    dp[i][j - 1] + 1,      # 삽입
                    dp[i - 1][j - 1] + 1   # 치환
                )

    return dp[len1][len2]


def levenshtein_similarity(text1: str, text2: str) -> float:
    """
    편집 거리를 유사도로 변환 (1.0 = 동일)

    두 문자열이 모두 비어 있으면 1.0을 반환합니다.
    """
    max_len = max(len(text1), len(text2))
    if max_len == 0:
        return 1.0

    distance = levenshtein_distance(text1, text2)
    return 1.0 - (distance / max_len)


def jaro_similarity(text1: str, text2: str) -> float:
    """
    Jaro 유사도 계산

    일치 윈도우: floor(max(len1, len2) / 2) - 1
    결과: (m/len1 + m/len2 + (m - t/2)/m) / 3

    Returns:
        동일 문자열은 1.0, 한쪽이 비었거나 일치 문자가 없으면 0.0
    """
    if text1 == text2:
        return 1.0

    len1, len2 = len(text1), len(text2)
    if len1 == 0 or len2 == 0:
        return 0.0

    match_window = max(len1, len2) // 2 - 1
    if match_window < 0:
        return 0.0

    text1_matches = [False] * len1
    text2_matches = [False] * len2
    matches = 0

    for i in range(len1):
        start = max(0, i - match_window)
        end = min(i + match_window + 1, len2)

        for j in range(start, end):
            if text2_matches[j] or text1[i] != text2[j]:
                continue
            text1_matches[i] = True
            text2_matches[j] = True
            matches += 1
            break

    if matches == 0:
        return 0.0

    transpositions = 0
    k = 0
    for i in range(len1):
        if not text1_matches[i]:
            continue
        while not text2_matches[k]:
            k += 1
        if text1[i] != text2[k]:
            transpositions += 1
        k += 1

    return (
        matches / len1
        + matches / len2
        + (matches - transpositions / 2) / matches
    ) / 3


def generate_ngrams(text: str, n: int = 2) -> List[str]:
    """
    문자 단위 n-gram 생성

    문자열이 n보다 짧으면 문자열 자체를 단일 원소로 반환합니다.

    Example:
        >>> generate_ngrams("가계대출")
        ['가계', '계대', '대출']
    """
    if len(text) < n:
        return [text]
    return [text[i:i + n] for i in range(len(text) - n + 1)]


def ngram_similarity(text1: str, text2: str, n: int = 2) -> float:
    """
    N-gram Jaccard 유사도 (|교집합| / |합집합|)

    입력은 소문자로 변환한 뒤 비교합니다. 합집합이 비면 0.0.
    """
    ngrams1 = set(generate_ngrams(text1.lower(), n))
    ngrams2 = set(generate_ngrams(text2.lower(), n))

    union = ngrams1 | ngrams2
    if not union:
        return 0.0

    return len(ngrams1 & ngrams2) / len(union)
