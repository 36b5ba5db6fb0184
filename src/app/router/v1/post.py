from fastapi import APIRouter, Body, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.common.utils.consts import MAX_ID, MAX_PAGE, InteractionKind, SubjectType
from src.app.common.utils.dependency import (
    get_current_user,
    get_optional_user,
    get_session,
    get_viewer_id,
)
from src.app.v1.comment.schema.requestDto import CommentCreateRequest
from src.app.v1.comment.schema.responseDto import CommentResponse
from src.app.v1.comment.service.comment_service import CommentService
from src.app.v1.interaction.schema.requestDto import LikeRequest, SaveRequest
from src.app.v1.interaction.schema.responseDto import LikeResponse, SaveResponse
from src.app.v1.post.schema.post import PostCreateRequest, PostListResponse, PostResponse
from src.app.v1.post.service.post import PostService

router = APIRouter(prefix="/posts", tags=["Posts"])
post_service = PostService()
comment_service = CommentService()


@router.get("/liked", response_model=list[PostResponse])
async def get_liked_posts(
    session: AsyncSession = Depends(get_session),
    user_info: dict = Depends(get_current_user),
):
    return await post_service.get_user_posts_by_kind(session, user_info["user_id"], InteractionKind.LIKE)


@router.get("/saved", response_model=list[PostResponse])
async def get_saved_posts(
    session: AsyncSession = Depends(get_session),
    user_info: dict = Depends(get_current_user),
):
    return await post_service.get_user_posts_by_kind(session, user_info["user_id"], InteractionKind.SAVE)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def post_write(
    post: PostCreateRequest,
    session: AsyncSession = Depends(get_session),
    user_info: dict = Depends(get_current_user),
):
    return await post_service.create_post(session, user_info["user_id"], post)


@router.get("", response_model=PostListResponse)
async def get_posts(
    page: int = Query(default=1, gt=0, le=MAX_PAGE),
    session: AsyncSession = Depends(get_session),
    user_info: dict | None = Depends(get_optional_user),
):
    return await post_service.get_posts(session, page, get_viewer_id(user_info))


@router.get("/{post_id}", response_model=PostResponse)
async def post_get(
    post_id: int = Path(gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_session),
    user_info: dict | None = Depends(get_optional_user),
):
    return await post_service.get_post(session, post_id, get_viewer_id(user_info))


@router.post("/{post_id}/like", response_model=LikeResponse)
async def like_post(
    post_id: int = Path(gt=0, le=MAX_ID),
    like_request: LikeRequest | None = Body(None),
    session: AsyncSession = Depends(get_session),
    user_info: dict = Depends(get_current_user),
):
    # 본문이 없거나 liked 값이 없으면 토글
    like = like_request.liked if like_request else None
    result = await post_service.like_post(session, user_info["user_id"], post_id, like=like)
    return LikeResponse(liked=result.present, likes_count=result.count)


@router.delete("/{post_id}/like", response_model=LikeResponse)
async def unlike_post(
    post_id: int = Path(gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_session),
    user_info: dict = Depends(get_current_user),
):
    result = await post_service.like_post(session, user_info["user_id"], post_id, like=False)
    return LikeResponse(liked=result.present, likes_count=result.count)


@router.post("/{post_id}/save", response_model=SaveResponse)
async def save_post(
    post_id: int = Path(gt=0, le=MAX_ID),
    save_request: SaveRequest | None = Body(None),
    session: AsyncSession = Depends(get_session),
    user_info: dict = Depends(get_current_user),
):
    save = save_request.saved if save_request else None
    result = await post_service.save_post(session, user_info["user_id"], post_id, save=save)
    return SaveResponse(saved=result.present)


@router.delete("/{post_id}/save", response_model=SaveResponse)
async def unsave_post(
    post_id: int = Path(gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_session),
    user_info: dict = Depends(get_current_user),
):
    result = await post_service.save_post(session, user_info["user_id"], post_id, save=False)
    return SaveResponse(saved=result.present)


@router.get("/{post_id}/comments", response_model=list[CommentResponse])
async def get_comments(
    post_id: int = Path(gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_session),
    user_info: dict | None = Depends(get_optional_user),
):
    return await comment_service.get_comments(session, SubjectType.POST, post_id, get_viewer_id(user_info))


@router.post("/{post_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    payload: CommentCreateRequest,
    post_id: int = Path(gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_session),
    user_info: dict = Depends(get_current_user),
):
    return await comment_service.create_comment(session, user_info["user_id"], SubjectType.POST, post_id, payload.content)
