import os

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=os.path.abspath(os.path.join(os.path.dirname(__file__), "../../.env")),
        extra="allow"
    )

    # an empty TMDB key is reported per request, not at startup
    TMDB_API_KEY: str = ""
    TMDB_API_URL: str = "https://api.themoviedb.org/3"
    TMDB_IMAGE_BASE_URL: str = "https://image.tmdb.org/t/p"
    TMDB_TIMEOUT_SECONDS: float = 10.0
    WATCH_PROVIDER_REGION: str = "US"

    OPENAI_API_KEY: str = ""
    OPENAI_API_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_MODEL: str = "gpt-4.1-nano"
    OPENAI_TEMPERATURE: float = 0.7
    OPENAI_MAX_TOKENS: int = 800

    RECOMMENDATION_COUNT: int = 20
    FANOUT_MAX_WORKERS: int = 20

    # persistence is optional; writes are skipped when no URI is set
    MONGODB_URI: str = ""
    MONGODB_DB_NAME: str = "reelmatch"
    MONGODB_TIMEOUT_MS: int = 2000

    LOG_LEVEL: str = "INFO"

    @property
    def persistence_enabled(self) -> bool:
        return bool(self.MONGODB_URI)


settings = Settings()
