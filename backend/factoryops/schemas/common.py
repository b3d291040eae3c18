from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every wire model: snake_case in Python, camelCase in JSON."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def dump(model: BaseModel) -> dict:
    """JSON-ready camelCase dict, used for Socket.IO payloads."""
    return model.model_dump(mode="json", by_alias=True)
