from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from garage_manager.core.error_codes import ErrorCode


class CamelModel(BaseModel):
    """Serializes with camelCase keys and accepts either spelling on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    code: ErrorCode
    error: str
    details: str


class DeleteResponse(BaseModel):
    id: int
    deleted: bool = True
