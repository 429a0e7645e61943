from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from bluemoon.utils.periods import as_utc


class APIModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )

    # Every timestamp is stored and served as UTC; naive values are taken as UTC
    @field_validator("*", mode="after")
    @classmethod
    def _datetimes_to_utc(cls, value):
        if isinstance(value, datetime):
            return as_utc(value)
        return value
