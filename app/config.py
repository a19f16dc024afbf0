"""
Configuration settings for the highlight backend.
Loads environment variables and provides application settings.
"""
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    PYTHON_BACKEND_PORT: int = 8000
    LOG_LEVEL: str = "info"

    # CORS
    CORS_ALLOWED_ORIGINS: str = "http://localhost:5173,http://localhost:3000"

    # Highlight defaults (요청에서 preset/overrides로 덮어쓸 수 있음)
    HIGHLIGHT_PRESET: str = "strict"
    HIGHLIGHT_FUZZY_ALGORITHM: str = "levenshtein"
    HIGHLIGHT_FUZZY_THRESHOLD: float = 0.7
    HIGHLIGHT_COMBINATION_ONLY_WORDS: str = "이하,초과,미만,이상"
    # entity로 판정할 추가 키워드 (쉼표 구분)
    HIGHLIGHT_CUSTOM_KEYWORDS: str = ""
    # 검색 토큰 수 상한 (0이면 제한 없음)
    HIGHLIGHT_MAX_SEARCH_TOKENS: int = 0
    HIGHLIGHT_AUTOMATON_CACHE_SIZE: int = 50

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def allowed_origins_list(self) -> List[str]:
        """Convert CORS allowed origins string to list."""
        return [origin.strip() for origin in self.CORS_ALLOWED_ORIGINS.split(',')]

    @property
    def combination_only_words_list(self) -> List[str]:
        """Convert combination-only words string to list."""
        return [w.strip() for w in self.HIGHLIGHT_COMBINATION_ONLY_WORDS.split(',') if w.strip()]

    @property
    def custom_keywords_list(self) -> List[str]:
        """Convert custom keywords string to list."""
        return [w.strip() for w in self.HIGHLIGHT_CUSTOM_KEYWORDS.split(',') if w.strip()]


# Global settings instance
settings = Settings()
