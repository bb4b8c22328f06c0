from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Loan Risk Report API"
    debug: bool = False
    log_level: str = "INFO"

    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    openai_base_url: Optional[str] = None

    # Optional [min, max] bound on revenue, net profit and loan amount
    enforce_amount_bounds: bool = False
    amount_min: float = 0
    amount_max: float = 5000

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def amount_bounds(self) -> tuple[float, float]:
        return (self.amount_min, self.amount_max)


settings = Settings()
