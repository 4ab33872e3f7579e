"""Models for test outcome records written to report artifacts."""

from typing import Literal

from pydantic import Field

from e2e_acceptance.models.base import Model

OutcomeStatus = Literal["passed", "failed", "timedOut", "skipped"]


class TestOutcome(Model):
    """Outcome of one executed test attempt."""

    __test__ = False

    title: str = Field(..., description="Test name within its source file")
    status: OutcomeStatus = Field(..., description="Final status of the attempt")
    error: str | None = Field(
        default=None, description="Failure message without terminal escapes"
    )
    duration: int = Field(..., ge=0, description="Elapsed time in milliseconds")
    test_file_name: str = Field(
        ..., alias="testFileName", description="Source file base name"
    )
    attempt: int = Field(default=1, ge=1, description="1-based attempt number")

    @property
    def unsuccessful(self) -> bool:
        """True when the attempt failed or timed out."""
        return self.status in {"failed", "timedOut"}
