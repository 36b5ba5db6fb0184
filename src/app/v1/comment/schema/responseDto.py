from datetime import datetime

from src.app.common.schema.base import CamelModel


class CommentResponse(CamelModel):
    id: int
    content: str
    username: str
    user_photo_url: str | None = None
    created_at: datetime
    user_id: int
    likes_count: int = 0
    is_liked: bool = False
