"""Configuration management using Pydantic Settings"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide defaults loaded from SEPA_* environment variables"""

    model_config = SettingsConfigDict(env_prefix="SEPA_", env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Document defaults
    default_pain_format: str = "pain.008.001.02"
    id_separator: str = "."

    # Validation
    validations_enabled: bool = True
    charset_validations_enabled: bool = True

    # Service
    service_name: str = "sepa-pain"
    log_level: str = "INFO"


settings = Settings()


class SepaOptions(BaseModel):
    """
    Per-document serialization options.

    Carried by a Document and handed to every PaymentInfo and Transaction its
    factories create, so documents with different settings can be built side
    by side.
    """

    model_config = ConfigDict(frozen=True)

    id_separator: str = Field(".", min_length=1, description="Joins parent and child ids")
    validations_enabled: bool = Field(True, description="Raise on invalid fields instead of emitting them sanitized")
    charset_validations_enabled: bool = Field(
        True, description="Check identifiers against the SEPA charset (only when validations are enabled)"
    )

    @property
    def charset_checks(self) -> bool:
        return self.validations_enabled and self.charset_validations_enabled

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> "SepaOptions":
        source = source or settings
        return cls(
            id_separator=source.id_separator,
            validations_enabled=source.validations_enabled,
            charset_validations_enabled=source.charset_validations_enabled,
        )
