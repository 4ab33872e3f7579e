"""Base model configuration for configuration and report records."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base model with standard configuration.

    Records are immutable once built and accept either their Python field
    names or their external (JSON) aliases.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)
