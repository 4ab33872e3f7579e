"""Configuration and report records."""

from e2e_acceptance.models.config import E2EConfig
from e2e_acceptance.models.outcome import OutcomeStatus, TestOutcome

__all__ = ["E2EConfig", "OutcomeStatus", "TestOutcome"]
