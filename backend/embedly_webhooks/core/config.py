from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    webhook_secret: str
    signature_header: str = "X-Embedly-Signature"
    max_payload_size: int = 1_048_576  # 1 MiB
    allowed_origins: str = "http://localhost:3000"
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[arg-type]
