"""Blog post API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Author(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(alias="firstName", min_length=1)
    last_name: str = Field(alias="lastName", min_length=1)


class CreatePostRequest(BaseModel):
    author: Author
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    created: datetime | None = None


class UpdatePostRequest(BaseModel):
    """Partial update; ``id`` is only accepted to be checked against the path."""

    id: str | None = None
    author: Author | None = None
    title: str | None = Field(default=None, min_length=1)
    content: str | None = Field(default=None, min_length=1)


class BlogPost(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    author: Author
    title: str
    content: str
    created: datetime
