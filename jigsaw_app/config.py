from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings configuration."""

    # API settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Jigsaw Puzzle Engine"

    # CORS settings
    BACKEND_CORS_ORIGINS: list[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"

    # Puzzle defaults, used whenever a request leaves a value out or sends an invalid one
    DEFAULT_ROWS: int = 4
    DEFAULT_COLS: int = 4
    MAX_GRID_SIZE: int = 20
    DEFAULT_SNAP_TOLERANCE: int = 40
    MIN_SNAP_TOLERANCE: int = 6
    MAX_SNAP_TOLERANCE: int = 64

    # Board geometry in pixels (play area plus staging margins)
    BOARD_WIDTH: int = 1100
    BOARD_HEIGHT: int = 800
    KNOB_RATIO: float = 0.22

    class Config:
        """Pydantic configuration class."""

        case_sensitive = True
        env_file = ".env"

    @model_validator(mode="after")
    def check_snap_tolerance_range(self) -> "Settings":
        """Reject a tolerance range that cannot contain the default."""
        if self.MIN_SNAP_TOLERANCE > self.MAX_SNAP_TOLERANCE:
            raise ValueError("MIN_SNAP_TOLERANCE must not exceed MAX_SNAP_TOLERANCE")
        if not self.MIN_SNAP_TOLERANCE <= self.DEFAULT_SNAP_TOLERANCE <= self.MAX_SNAP_TOLERANCE:
            raise ValueError("DEFAULT_SNAP_TOLERANCE must lie within the snap tolerance range")
        return self


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Create instance
settings = get_settings()
