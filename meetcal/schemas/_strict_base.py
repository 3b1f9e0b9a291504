"""Schema base classes: request bodies reject unknown fields."""

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class StrictRequestModel(StrictModel):
    """Base for request bodies; a typo'd field is an error, not silently dropped."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)
