from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://localhost:5432/hiregenius"
    redis_url: str = "redis://localhost:6379/0"

    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    chat_temperature: float = 0.7

    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    allow_demo_user: bool = True

    # Cost controls
    default_monthly_llm_budget: int = 1000

    # Dashboard sizing
    top_candidates_limit: int = 5
    recent_activity_limit: int = 10

    log_level: str = "INFO"

    model_config = {"env_prefix": "HIREGENIUS_"}


settings = Settings()
