from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class EntityReference(BaseModel):
    """Reference to another entity by its identifier."""
    id: Optional[int] = Field(None, description="Identifier of the referenced entity")

    model_config = ConfigDict(from_attributes=True)


class BaseEntityGet(BaseModel):
    id: int

    model_config = ConfigDict(from_attributes=True)
