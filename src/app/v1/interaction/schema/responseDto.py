from datetime import datetime

from pydantic import Field

from src.app.common.schema.base import CamelModel
from src.app.common.utils.consts import InteractionKind, SubjectType


class LikeResponse(CamelModel):
    liked: bool
    likes_count: int


class SaveResponse(CamelModel):
    saved: bool


class InteractionResponse(CamelModel):
    id: int
    user_id: int
    subject_type: SubjectType
    subject_id: int
    kind: InteractionKind
    content: str = Field("", validation_alias="payload")
    created_at: datetime


class InteractionCreateResponse(CamelModel):
    message: str
    interaction: InteractionResponse
