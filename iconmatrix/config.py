"""Library configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """IconMatrix settings."""

    # Rasterizer
    SUPERSAMPLE_FACTOR: int = 8  # Render at this multiple of the target grid
    DEFAULT_THRESHOLD: float = 0.1

    # Tweening
    MAX_TWEEN_FRAMES: int = 20

    # Playback
    DEFAULT_FPS: int = 12
    MIN_FPS: int = 1
    MAX_FPS: int = 60
    EDITOR_MAX_FPS: int = 30
    REFRESH_RATE: int = 60  # Display refreshes per second for timer schedulers

    # Editor
    HISTORY_LIMIT: int = 50
    DEFAULT_GRID_SIZE: int = 9

    model_config = {"env_prefix": "ICONMATRIX_"}


settings = Settings()
