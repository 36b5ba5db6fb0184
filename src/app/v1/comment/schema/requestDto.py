from pydantic import Field

from src.app.common.schema.base import CamelModel


class CommentCreateRequest(CamelModel):
    content: str = Field("", max_length=2000, description="댓글 내용")
