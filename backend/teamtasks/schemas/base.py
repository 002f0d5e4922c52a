from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """camelCase on the wire, snake_case in Python. Accepts either on input."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def reject_null(value):
    # Absent fields are skipped via exclude_unset; an explicit null is an error
    if value is None:
        raise ValueError("may not be null")
    return value


def clean_text(value, min_length: int = 2):
    if value is None:
        return value
    value = value.strip()
    if len(value) < min_length:
        raise ValueError(f"must have at least {min_length} characters")
    return value
