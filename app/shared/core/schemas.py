"""
Base pydantic schemas for PetVally.
The API speaks camelCase JSON; Python code keeps snake_case attributes.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """
    Base schema for request and response bodies.

    Fields are read from ORM rows (`from_attributes`) and accepted or
    emitted under their camelCase alias.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_json(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(by_alias=True, mode="json")


def dump(schema: type, obj: Any) -> Dict[str, Any]:
    """Validate an ORM row (or dict) against `schema` and return its JSON form."""
    return schema.model_validate(obj).to_json()


def dump_many(schema: type, objs: Any) -> list:
    return [dump(schema, obj) for obj in objs]
