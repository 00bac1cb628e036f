"""Application settings using Pydantic Settings."""

from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv


def find_and_load_env_file():
    """Find and load .env file in current directory or parent directories."""
    current = Path.cwd().resolve()
    # Check current directory and up to 3 levels up
    for _ in range(4):
        env_path = current / ".env"
        if env_path.exists():
            load_dotenv(env_path, override=False)
            return str(env_path)
        parent = current.parent
        if parent == current:  # Reached root
            break
        current = parent
    return None


# Load .env file before Settings class is defined
find_and_load_env_file()


class Settings(BaseSettings):
    """Application configuration settings."""

    # LLM Configuration
    openai_api_key: Optional[str] = None
    model_name: Optional[str] = None
    gemini_api_key: Optional[str] = None
    gemini_model: Optional[str] = None
    # Local LLM support (OpenAI-compatible API)
    llm_url: Optional[str] = None
    model: Optional[str] = None
    temperature: float = 0.7

    # Each provider gets a single attempt; a failed generation call falls
    # back to synthetic records instead of being retried.
    llm_timeout: float = 120.0

    # Generation Configuration
    default_record_count: int = 5
    seed: Optional[int] = None
    output_dir: Path = Path("output")

    # Logging Configuration
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    model_config = SettingsConfigDict(
        env_file=None,  # We load it manually with dotenv
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        protected_namespaces=(),
    )

    def __init__(self, **kwargs):
        """Initialize settings and create the log directory if needed."""
        find_and_load_env_file()
        super().__init__(**kwargs)
        self.output_dir = Path(self.output_dir)
        if self.log_file:
            self.log_file = Path(self.log_file)
            self.log_file.parent.mkdir(parents=True, exist_ok=True)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
