from datetime import datetime

from pydantic import BaseModel, Field


class LocationCreate(BaseModel):
    name: str = Field(max_length=120)
    color: str | None = Field(default=None, max_length=32)


class LocationUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=120)
    color: str | None = Field(default=None, max_length=32)


class LocationOut(BaseModel):
    id: int
    name: str
    color: str | None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
