from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseDto(BaseModel):
    """
    Base class of every response payload.

    Fields are declared in snake_case and serialized as camelCase
    (`full_name` -> `fullName`) by `api_response`. DTOs are usually built
    straight from entities through `model_validate(entity)`.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
