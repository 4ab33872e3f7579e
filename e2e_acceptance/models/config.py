"""Model for the suite configuration loaded from config.json."""

from pathlib import Path
from typing import Any

from pydantic import Field, SecretStr, field_validator

from e2e_acceptance.models.base import Model

DEFAULT_LOG_FILE = Path("/tmp/e2e-log.txt")


class E2EConfig(Model):
    """Settings shared by the bootstrap phase and every scenario.

    Field aliases are the keys used both in config.json and in the process
    environment, so one record can be validated from either source.
    """

    app_url: str = Field(..., alias="E2E_APP_URL", description="Application base URL")
    user: str = Field(..., alias="E2E_USER", description="Administrator email")
    password: SecretStr = Field(
        ..., alias="E2E_PASSWORD", description="Password shared by all test users"
    )
    unique_context: str = Field(
        ...,
        alias="E2E_UNIQUE_CONTEXT",
        description="Per-run token used to namespace created entities",
    )
    log_file: Path = Field(
        default=DEFAULT_LOG_FILE,
        alias="E2E_LOG_FILE",
        description="Diagnostic step log path",
    )

    @field_validator("app_url", "user", "password", "unique_context", mode="before")
    @classmethod
    def _reject_blank(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            raise ValueError("must not be empty")
        return value

    def to_environment(self) -> dict[str, str]:
        """Return the record as environment variables keyed by alias.

        The optional log file is only included when it was configured
        explicitly.
        """
        environment = {
            "E2E_APP_URL": self.app_url,
            "E2E_USER": self.user,
            "E2E_PASSWORD": self.password.get_secret_value(),
            "E2E_UNIQUE_CONTEXT": self.unique_context,
        }
        if "log_file" in self.model_fields_set:
            environment["E2E_LOG_FILE"] = str(self.log_file)
        return environment
