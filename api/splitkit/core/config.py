from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "splitkit"
    API_PREFIX: str = "/api/v1"

    # Persistence
    STORAGE_KEY: str = "splitkit.variants"
    STORAGE_URL: str = "sqlite:///splitkit.db"

    # Allocation; None seeds from OS entropy
    RANDOM_SEED: int | None = None

    LOG_LEVEL: str = "INFO"

    model_config = {"env_prefix": "SPLITKIT_", "env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
