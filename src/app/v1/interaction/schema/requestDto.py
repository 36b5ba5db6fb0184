from pydantic import Field

from src.app.common.schema.base import CamelModel
from src.app.common.utils.consts import MAX_ID, InteractionKind, SubjectType


class LikeRequest(CamelModel):
    # 값이 없으면 토글
    liked: bool | None = None


class SaveRequest(CamelModel):
    saved: bool | None = None


class InteractionCreateRequest(CamelModel):
    subject_type: SubjectType = Field(..., description="post, pet, comment")
    subject_id: int = Field(..., gt=0, le=MAX_ID)
    kind: InteractionKind
    content: str | None = Field(None, max_length=2000, description="댓글 내용 (kind=comment)")
