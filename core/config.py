from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DiagramSettings(BaseSettings):
    """Defaults for diagram generation, overridable per request."""

    DIAGRAM_SORTING_ALGORITHM: str = "first"  # first, last, common, beginning, end
    DIAGRAM_SHOW_ONLY_TIMEPOINT: bool = False
    DIAGRAM_SHOW_ARRIVAL_ON_DIFFERENCE: Optional[float] = None  # minutes
    DIAGRAM_INCLUDE_EXCEPTIONS: bool = False
    DIAGRAM_SHOW_TRIP_CONTINUATION: bool = True
    DIAGRAM_DATE: Optional[str] = None  # YYYYMMDD, defaults to today

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class Settings(BaseSettings):
    # Database
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""  # Required via .env in production
    POSTGRES_DB: str = "gtfs_diagrams"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432

    # Full URL override (e.g. sqlite:///feed.db for local feeds)
    DATABASE_URL_OVERRIDE: str = ""

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Diagram defaults (nested)
    diagram: DiagramSettings = Field(default_factory=DiagramSettings)

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    def validate_production_settings(self) -> None:
        """Validate critical settings for production environment.

        Raises ValueError if production settings are invalid.
        """
        errors = []

        if self.is_production:
            if not self.DATABASE_URL_OVERRIDE and (
                not self.POSTGRES_PASSWORD or self.POSTGRES_PASSWORD == "postgres"
            ):
                errors.append(
                    "POSTGRES_PASSWORD must be set to a secure value in production"
                )

            if self.DEBUG:
                errors.append("DEBUG must be False in production")

        if errors:
            raise ValueError(
                "Production configuration errors:\n" + "\n".join(f"  - {e}" for e in errors)
            )

    def validate_diagram_settings(self) -> None:
        """Reject diagram defaults the engine cannot honour."""
        algorithm = self.diagram.DIAGRAM_SORTING_ALGORITHM
        if algorithm not in ("first", "last", "common", "beginning", "end"):
            raise ValueError(
                "DIAGRAM_SORTING_ALGORITHM must be one of first, last, common, beginning, end "
                f"(got {algorithm!r})"
            )

    def validate_development_settings(self) -> None:
        """Set sensible defaults for development if not configured."""
        if not self.POSTGRES_PASSWORD and not self.DATABASE_URL_OVERRIDE:
            self.POSTGRES_PASSWORD = "postgres"
            print("WARNING: Using default POSTGRES_PASSWORD for development")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Create settings instance
settings = Settings()

# Validate based on environment
if settings.is_production:
    settings.validate_production_settings()
else:
    settings.validate_development_settings()
settings.validate_diagram_settings()
