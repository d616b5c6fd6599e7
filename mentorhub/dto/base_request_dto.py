from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseRequestDto(BaseModel):
    """
    Base class of request bodies.

    Clients send camelCase keys (`mentorId`, `markAllAsRead`); unknown keys
    are rejected and surrounding whitespace is stripped from strings.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
    )
