"""
조합 매칭 탐색기 테스트

단어 경계, 연속성 점수, 조합 점수, 겹침 제거, Aho-Corasick 탐색 검증
"""

import pytest

from agent.highlight.automaton_cache import AutomatonCache
from agent.highlight.combination_matcher import (
    calculate_continuity,
    find_all_occurrences,
    find_combination_matches,
    is_valid_word_boundary,
    remove_overlapping_matches,
)
from agent.highlight.config import ContinuityConfig, ScoringConfig
from agent.highlight.keywords import combination_only_predicate
from agent.highlight.models import CombinationMatch, Token, TokenType
from agent.highlight.tokenizer import smart_tokenize


# 같은 검색어가 붙어서/떨어져서/부분적으로 등장하는 문서
SAMPLE_DOCUMENT = "가계 대출 CSS대출 적용 가계 CSS 대출 비적용"


def _match(start, end, score, text="x"):
    return CombinationMatch(
        tokens=[Token(text=text, type=TokenType.ENGLISH, original=text)],
        matched_text=text,
        score=score,
        base_score=score,
        bonus_score=0,
        start_index=start,
        end_index=end,
    )


class TestWordBoundary:
    """단어 경계 검사 테스트"""

    def test_whole_string(self):
        assert is_valid_word_boundary("대출", 0, 2) is True

    def test_surrounded_by_spaces(self):
        assert is_valid_word_boundary("가계 대출 적용", 3, 5) is True

    def test_embedded_on_both_sides_rejected(self):
        assert is_valid_word_boundary("생태시스템구축", 2, 5) is False

    def test_korean_particle_allowed(self):
        """한쪽만 경계여도 유효 ("시스템을", "생태시스템")"""
        assert is_valid_word_boundary("시스템을 구축", 0, 3) is True
        assert is_valid_word_boundary("생태시스템 구축", 2, 5) is True

    def test_latin_and_digit_neighbors_rejected(self):
        assert is_valid_word_boundary("xcssx", 1, 4) is False
        assert is_valid_word_boundary("acss2", 1, 4) is False

    def test_punctuation_neighbors_allowed(self):
        assert is_valid_word_boundary("(대출)", 1, 3) is True


class TestFindAllOccurrences:
    """Aho-Corasick 전체 등장 위치 탐색 테스트"""

    def test_multiple_patterns(self):
        occurrences = find_all_occurrences("abcabc", ["abc", "bc"], cache=AutomatonCache())

        assert occurrences["abc"] == [0, 3]
        assert occurrences["bc"] == [1, 4]

    def test_overlapping_occurrences(self):
        occurrences = find_all_occurrences("aaa", ["aa"], cache=AutomatonCache())

        assert occurrences["aa"] == [0, 1]

    def test_empty_inputs(self):
        assert find_all_occurrences("", ["a"], cache=AutomatonCache()) == {}
        assert find_all_occurrences("abc", [""], cache=AutomatonCache()) == {}

    def test_automaton_is_cached(self):
        cache = AutomatonCache()

        find_all_occurrences("가계 대출", ["가계", "대출"], cache=cache)
        find_all_occurrences("대출 가계", ["대출", "가계"], cache=cache)

        assert len(cache) == 1


class TestCalculateContinuity:
    """연속성/근접성 계산 테스트"""

    def test_full_sequence(self):
        tokens = smart_tokenize("가계CSS대출")

        info = calculate_continuity(SAMPLE_DOCUMENT, tokens)

        assert info.has_document_continuity is True
        # 연속 윈도우 4개 + 문장 동시 등장 3 x 0.3
        assert info.proximity_score == pytest.approx(4.9)
        assert info.matched_sequences[0] == "가계 대출 css대출"

    def test_single_token_is_capped(self):
        tokens = smart_tokenize("가계")

        info = calculate_continuity(SAMPLE_DOCUMENT, tokens)

        assert info.proximity_score == pytest.approx(2.0)

    def test_no_continuity(self):
        tokens = smart_tokenize("신용 등급")

        info = calculate_continuity(SAMPLE_DOCUMENT, tokens)

        assert info.has_document_continuity is False
        assert info.proximity_score == 0.0
        assert info.matched_sequences == ()

    def test_sentence_cooccurrence_only_best_sentence(self):
        tokens = smart_tokenize("가계 대출")
        config = ContinuityConfig(max_distance=1, min_match_ratio=1.0)

        info = calculate_continuity("가계 한도. 가계 금리 대출", tokens, config)

        # 인접 윈도우 없음, 두 번째 문장만 두 토큰 모두 포함
        assert info.has_document_continuity is False
        assert info.proximity_score == pytest.approx(0.6)

    def test_empty_inputs(self):
        assert calculate_continuity("", smart_tokenize("가계")).proximity_score == 0.0
        assert calculate_continuity(SAMPLE_DOCUMENT, []).has_document_continuity is False


class TestFindCombinationMatches:
    """조합 매칭 탐색 테스트"""

    def test_reference_document(self):
        """붙어 쓴 검색어가 띄어 쓴 문서 구간과 조합으로 매칭"""
        tokens = smart_tokenize("가계CSS대출")

        matches = find_combination_matches(SAMPLE_DOCUMENT, tokens, cache=AutomatonCache())

        assert [(m.matched_text, m.start_index, m.end_index) for m in matches] == [
            ("가계 CSS 대출", 15, 24),
            ("CSS대출", 6, 11),
            ("가계", 0, 2),
            ("대출", 3, 5),
        ]
        best = matches[0]
        assert [t.text for t in best.tokens] == ["가계", "CSS", "대출"]
        assert best.base_score == 5
        assert best.bonus_score == pytest.approx(3.45)
        assert best.score == pytest.approx(8.45)
        assert matches[1].score == pytest.approx(6)
        assert matches[2].score == pytest.approx(3)

    def test_positions_match_original_text(self):
        tokens = smart_tokenize("가계CSS대출")

        for match in find_combination_matches(SAMPLE_DOCUMENT, tokens):
            assert SAMPLE_DOCUMENT[match.start_index:match.end_index] == match.matched_text

    def test_results_do_not_overlap(self):
        tokens = smart_tokenize("가계CSS대출")

        matches = find_combination_matches(SAMPLE_DOCUMENT, tokens)

        for i, a in enumerate(matches):
            for b in matches[i + 1:]:
                assert not a.overlaps(b)

    def test_word_boundary_excludes_embedded_token(self):
        """양쪽이 모두 붙어 있는 '가계CSS대출' 안의 'CSS'는 단독 매칭되지 않음"""
        tokens = smart_tokenize("CSS")

        matches = find_combination_matches("가계CSS대출 적용", tokens)

        assert matches == []

    def test_korean_particle_attached_token_matches(self):
        """조사가 붙은 '대출을'에서도 '대출'이 매칭"""
        tokens = smart_tokenize("대출")

        matches = find_combination_matches("가계 대출을 신청합니다", tokens)

        assert [(m.matched_text, m.start_index, m.end_index) for m in matches] == [("대출", 3, 5)]
        assert matches[0].score == pytest.approx(3)

    def test_comma_separated_search_finds_combination(self):
        tokens = smart_tokenize("가계,CSS,대출")

        matches = find_combination_matches(SAMPLE_DOCUMENT, tokens, cache=AutomatonCache())

        assert matches[0].matched_text == "가계 CSS 대출"
        assert matches[0].score == pytest.approx(8.45)

    def test_continuity_is_shared_and_immutable(self):
        tokens = smart_tokenize("가계")

        matches = find_combination_matches(SAMPLE_DOCUMENT, tokens)

        assert len(matches) == 2
        assert matches[0].continuity == matches[1].continuity
        assert isinstance(matches[0].continuity.matched_sequences, tuple)
        with pytest.raises(AttributeError):
            matches[0].continuity.proximity_score = 0.0

    def test_case_insensitive_match_keeps_original_text(self):
        tokens = smart_tokenize("css")

        matches = find_combination_matches("적용 CSS 대상", tokens)

        assert len(matches) == 1
        assert matches[0].matched_text == "CSS"
        assert matches[0].start_index == 3

    def test_score_capped_at_max(self):
        tokens = smart_tokenize("가계CSS대출")
        config = ScoringConfig(max_score=4)

        matches = find_combination_matches(SAMPLE_DOCUMENT, tokens, config=config)

        assert all(m.score <= 4 for m in matches)

    def test_min_score_filters(self):
        tokens = smart_tokenize("가계CSS대출")
        config = ScoringConfig(min_score=7)

        matches = find_combination_matches(SAMPLE_DOCUMENT, tokens, config=config)

        assert [m.matched_text for m in matches] == ["가계 CSS 대출"]

    def test_combination_only_single_is_capped(self):
        tokens = smart_tokenize("이하")
        predicate = combination_only_predicate()

        assert find_combination_matches("한도 5억 이하", tokens, is_combination_only=predicate) == []

        matches = find_combination_matches(
            "한도 5억 이하",
            tokens,
            config=ScoringConfig(min_score=0),
            is_combination_only=predicate
        )
        assert len(matches) == 1
        assert matches[0].score == 0.5

    def test_combination_only_bonus_in_combination(self):
        tokens = smart_tokenize("5억 이하")

        matches = find_combination_matches(
            "대출 한도 5억 이하 적용",
            tokens,
            is_combination_only=combination_only_predicate()
        )

        assert matches[0].matched_text == "5억 이하"
        assert matches[0].base_score == 3
        assert matches[0].bonus_score >= 0.5

    def test_no_tokens_or_document(self):
        assert find_combination_matches("", smart_tokenize("가계")) == []
        assert find_combination_matches(SAMPLE_DOCUMENT, []) == []

    def test_combination_size_limited_to_four(self):
        tokens = smart_tokenize("a b c d e")

        matches = find_combination_matches("a b c d e", tokens, config=ScoringConfig(max_score=100))

        assert max(len(m.tokens) for m in matches) == 4


class TestRemoveOverlappingMatches:
    """겹침 제거 테스트"""

    def test_higher_score_wins(self):
        result = remove_overlapping_matches([_match(0, 5, 2), _match(3, 8, 5)])

        assert [(m.start_index, m.score) for m in result] == [(3, 5)]

    def test_equal_scores_keep_first_seen(self):
        result = remove_overlapping_matches([_match(0, 5, 3, "first"), _match(2, 6, 3, "second")])

        assert [m.matched_text for m in result] == ["first"]

    def test_adjacent_spans_do_not_overlap(self):
        result = remove_overlapping_matches([_match(0, 3, 1), _match(3, 6, 1)])

        assert len(result) == 2

    def test_empty(self):
        assert remove_overlapping_matches([]) == []


def test_combination_outscores_single_tokens():
    """3개 조합 매칭이 같은 토큰의 단일 매칭보다 점수가 높음"""
    tokens = [
        Token(text=text, type=TokenType.KOREAN, original=text)
        for text in ("가계", "CSS", "대출")
    ]
    document = "가계 CSS 대출 지원"

    matches = find_combination_matches(document, tokens)
    singles = [m for token in tokens for m in find_combination_matches(document, [token])]

    assert matches[0].matched_text == "가계 CSS 대출"
    assert matches[0].score >= 3
    assert all(matches[0].score > s.score for s in singles)
