"""
Aho-Corasick Automaton 캐시

검색 패턴 집합별 automaton을 캐싱하여
같은 검색어로 여러 문서/페이지를 하이라이트할 때 빌드 비용을 절감합니다.
"""

from collections import OrderedDict
from typing import Any, Iterable, Optional
import hashlib
import logging

logger = logging.getLogger(__name__)


class AutomatonCache:
    """
    Aho-Corasick Automaton LRU 캐시

    캐시 키는 패턴 집합의 해시값이므로 패턴이 바뀌면 자동으로 다른 키가 됩니다.
    """

    def __init__(self, max_size: int = 50):
        """
        Args:
            max_size: 최대 캐시 크기 (LRU 방식으로 관리)
        """
        self._cache: "OrderedDict[str, Any]" = OrderedDict()
        self._max_size = max_size

    def __len__(self) -> int:
        return len(self._cache)

    @staticmethod
    def generate_cache_key(patterns: Iterable[str]) -> str:
        """
        패턴 집합 기반 캐시 키 생성

        패턴 순서와 무관하게 같은 집합이면 같은 키를 반환합니다.
        """
        unique = sorted(set(patterns))
        joined = "\x1f".join(unique)
        hash_value = hashlib.md5(joined.encode("utf-8")).hexdigest()[:16]
        return f"patterns_{len(unique)}_{hash_value}"

    def get(self, patterns: Iterable[str]) -> Optional[Any]:
        """캐시에서 automaton 조회"""
        key = self.generate_cache_key(patterns)
        automaton = self._cache.get(key)
        if automaton is not None:
            self._cache.move_to_end(key)
            logger.debug(f"Automaton cache hit: {key}")
        return automaton

    def set(self, patterns: Iterable[str], automaton: Any) -> None:
        """캐시에 automaton 저장"""
        key = self.generate_cache_key(patterns)

        if key not in self._cache and len(self._cache) >= self._max_size:
            oldest_key, _ = self._cache.popitem(last=False)
            logger.debug(f"Automaton cache evicted (LRU): {oldest_key}")

        self._cache[key] = automaton
        self._cache.move_to_end(key)
        logger.debug(f"Automaton cache stored: {key}")

    def resize(self, max_size: int) -> None:
        """최대 크기 변경 (초과분은 오래된 순으로 제거)"""
        self._max_size = max_size
        while len(self._cache) > self._max_size:
            self._cache.popitem(last=False)

    def clear(self) -> None:
        """캐시 전체 초기화"""
        self._cache.clear()
        logger.info("Automaton cache cleared")


# 전역 캐시 인스턴스 (싱글톤)
_automaton_cache = AutomatonCache(max_size=50)


def get_automaton_cache() -> AutomatonCache:
    """전역 Automaton 캐시 인스턴스 반환"""
    return _automaton_cache
