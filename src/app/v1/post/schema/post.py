from datetime import datetime

from pydantic import Field

from src.app.common.schema.base import CamelModel
from src.app.common.utils.consts import PostType, Visibility


class PostCreateRequest(CamelModel):
    content: str = Field(..., min_length=1, max_length=2000)
    media_urls: list[str] | None = None
    visibility_type: Visibility = Visibility.PUBLIC
    post_type: PostType = PostType.REGULAR


class PostResponse(CamelModel):
    id: int
    user_id: int
    username: str | None = None
    user_photo_url: str | None = None
    content: str
    media_urls: list[str] = []
    visibility_type: Visibility
    post_type: PostType
    likes_count: int
    comments_count: int
    created_at: datetime
    is_liked: bool = False
    is_saved: bool = False


class PostListResponse(CamelModel):
    next: str | None = None
    previous: str | None = None
    posts: list[PostResponse]
