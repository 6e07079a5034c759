# app/schemas/common.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Any, Optional

class CamelModel(BaseModel):
    """Serializes as camelCase, accepts camelCase or snake_case input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    message: str
    data: Optional[Any] = None

class MessageResponse(BaseModel):
    success: bool = True
    message: str

class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    storage: str
    timestamp: str
