from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PostCreate(BaseModel):
    caption: str | None = None
    image_url: str = Field(min_length=1)

    @field_validator("caption")
    @classmethod
    def _blank_caption_is_absent(cls, v: str | None) -> str | None:
        if v is None or v == "":
            return None
        return v


class PostOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    caption: str | None = None
    image_url: str = Field(serialization_alias="imageUrl")
    created_at: datetime | None = Field(default=None, serialization_alias="createdAt")
