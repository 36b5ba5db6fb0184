from fastapi import APIRouter, Body, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.common.utils.consts import MAX_ID, MAX_PAGE, PetStatus, SubjectType
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
from src.app.v1.pet.schema.pet import PetCreateRequest, PetListResponse, PetResponse
from src.app.v1.pet.service.pet_service import PetService

router = APIRouter(prefix="/pets", tags=["Pets"])
pet_service = PetService()
comment_service = CommentService()


@router.post("", response_model=PetResponse, status_code=status.HTTP_201_CREATED)
async def register_pet(
    pet: PetCreateRequest,
    session: AsyncSession = Depends(get_session),
    user_info: dict = Depends(get_current_user),
):
    return await pet_service.create_pet(session, user_info["user_id"], pet)


@router.get("", response_model=PetListResponse)
async def get_pets(
    page: int = Query(default=1, gt=0, le=MAX_PAGE),
    pet_status: PetStatus | None = Query(default=None, alias="status"),
    session: AsyncSession = Depends(get_session),
    user_info: dict | None = Depends(get_optional_user),
):
    return await pet_service.get_pets(session, page, get_viewer_id(user_info), pet_status)


@router.get("/{pet_id}", response_model=PetResponse)
async def get_pet(
    pet_id: int = Path(gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_session),
    user_info: dict | None = Depends(get_optional_user),
):
    return await pet_service.get_pet(session, pet_id, get_viewer_id(user_info))


@router.post("/{pet_id}/like", response_model=LikeResponse)
async def like_pet(
    pet_id: int = Path(gt=0, le=MAX_ID),
    like_request: LikeRequest | None = Body(None),
    session: AsyncSession = Depends(get_session),
    user_info: dict = Depends(get_current_user),
):
    like = like_request.liked if like_request else None
    result = await pet_service.like_pet(session, user_info["user_id"], pet_id, like=like)
    return LikeResponse(liked=result.present, likes_count=result.count)


@router.delete("/{pet_id}/like", response_model=LikeResponse)
async def unlike_pet(
    pet_id: int = Path(gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_session),
    user_info: dict = Depends(get_current_user),
):
    result = await pet_service.like_pet(session, user_info["user_id"], pet_id, like=False)
    return LikeResponse(liked=result.present, likes_count=result.count)


@router.post("/{pet_id}/save", response_model=SaveResponse)
async def save_pet(
    pet_id: int = Path(gt=0, le=MAX_ID),
    save_request: SaveRequest | None = Body(None),
    session: AsyncSession = Depends(get_session),
    user_info: dict = Depends(get_current_user),
):
    save = save_request.saved if save_request else None
    result = await pet_service.save_pet(session, user_info["user_id"], pet_id, save=save)
    return SaveResponse(saved=result.present)


@router.delete("/{pet_id}/save", response_model=SaveResponse)
async def unsave_pet(
    pet_id: int = Path(gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_session),
    user_info: dict = Depends(get_current_user),
):
    result = await pet_service.save_pet(session, user_info["user_id"], pet_id, save=False)
    return SaveResponse(saved=result.present)


@router.get("/{pet_id}/comments", response_model=list[CommentResponse])
async def get_pet_comments(
    pet_id: int = Path(gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_session),
    user_info: dict | None = Depends(get_optional_user),
):
    return await comment_service.get_comments(session, SubjectType.PET, pet_id, get_viewer_id(user_info))


@router.post("/{pet_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_pet_comment(
    payload: CommentCreateRequest,
    pet_id: int = Path(gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_session),
    user_info: dict = Depends(get_current_user),
):
    return await comment_service.create_comment(session, user_info["user_id"], SubjectType.PET, pet_id, payload.content)
