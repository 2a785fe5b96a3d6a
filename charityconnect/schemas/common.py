from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


def blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def to_optional_str(value):
    value = blank_to_none(value)
    if value is None:
        return None
    return str(value)
