"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration from environment variables."""

    rates_file: str = ""  # empty = bundled config/statutory_rates.yaml
    log_level: str = "INFO"
    auth_username: str = ""
    auth_password: str = ""

    @property
    def auth_enabled(self) -> bool:
        """Basic Auth is only enforced when both credentials are set."""
        return bool(self.auth_username and self.auth_password)

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
