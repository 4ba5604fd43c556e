from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    SQLSERVER_CONN_STRING: str = ""
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]
    CLOSURE_EPSILON: float = 0.01
    MAX_MONTHS: int = 600
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
