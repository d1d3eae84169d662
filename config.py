import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class Settings:
    # API settings
    api_host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    api_port: int = field(default_factory=lambda: int(os.getenv("PORT", "3000")))

    # Database settings
    database_file: str = field(default_factory=lambda: os.getenv("DATABASE_FILE", "./database.db"))

    # Application settings
    app_name: str = field(default_factory=lambda: os.getenv("APP_NAME", "Book Service"))
    app_version: str = field(default_factory=lambda: os.getenv("APP_VERSION", "1.0.0"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG"))

    @classmethod
    def from_env(cls) -> "Settings":
        """Build a fresh Settings instance from the current environment."""
        return cls()


settings = Settings()
