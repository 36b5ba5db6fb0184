from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.common.utils.consts import MAX_ID
from src.app.common.utils.dependency import get_current_user, get_session
from src.app.v1.comment.service.comment_service import CommentService
from src.app.v1.interaction.schema.responseDto import LikeResponse

router = APIRouter(prefix="/comments", tags=["Comments"])
comment_service = CommentService()


@router.post("/{comment_id}/toggle-like", response_model=LikeResponse)
async def toggle_comment_like(
    comment_id: int = Path(gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    result = await comment_service.toggle_comment_like(session, current_user["user_id"], comment_id)
    return LikeResponse(liked=result.present, likes_count=result.count)
