"""Request/response schemas for community board posts, replies and likes."""

from datetime import date, datetime

from pydantic import Field, model_validator

from app.schemas.common import ApiModel, PostType, Town

# Post fields an update may change but never set to null.
EDITABLE_POST_FIELDS = ("type", "town", "title", "body", "target_date")


class PostCreate(ApiModel):
    """Body for POST /community."""

    type: PostType
    town: Town
    title: str = Field(..., min_length=1, max_length=200)
    body: str = Field(..., min_length=1, max_length=5000)
    target_date: date = Field(..., description="Day the post is about, YYYY-MM-DD")


class PostUpdate(ApiModel):
    """Body for PUT /community/{id}: any subset of the editable fields."""

    type: PostType | None = None
    town: Town | None = None
    title: str | None = Field(default=None, min_length=1, max_length=200)
    body: str | None = Field(default=None, min_length=1, max_length=5000)
    target_date: date | None = None

    @model_validator(mode="after")
    def fields_not_null(self) -> "PostUpdate":
        for name in EDITABLE_POST_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be cleared")
        return self


class ReplyCreate(ApiModel):
    """Body for POST /community/{id}/replies."""

    body: str = Field(..., min_length=1, max_length=2000)


class ReplyResponse(ApiModel):
    id: int
    author_id: int
    author_name: str
    body: str
    created_at: datetime | None = None


class PostResponse(ApiModel):
    """Community post with its likes (identity ids) and ordered replies."""

    id: int
    author_id: int
    author_name: str
    type: str
    town: str
    title: str
    body: str
    target_date: date
    likes: list[int] = Field(default_factory=list)
    like_count: int = 0
    replies: list[ReplyResponse] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class LikeToggleResponse(ApiModel):
    """Like state after POST /community/{id}/likes."""

    post_id: int
    liked: bool
    like_count: int
    likes: list[int]
