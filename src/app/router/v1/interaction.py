from fastapi import APIRouter, Depends, Path, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.common.schema.base import MessageResponse
from src.app.common.utils.consts import MAX_ID, InteractionKind, SubjectType
from src.app.common.utils.dependency import get_current_user, get_session
from src.app.v1.interaction.schema.requestDto import InteractionCreateRequest
from src.app.v1.interaction.schema.responseDto import (
    InteractionCreateResponse,
    InteractionResponse,
)
from src.app.v1.interaction.service.interaction_service import InteractionService

router = APIRouter(prefix="/interactions", tags=["Interactions"])
interaction_service = InteractionService()


async def _list_mine(session: AsyncSession, user_id: int, kind: InteractionKind | None) -> list[InteractionResponse]:
    interactions = await interaction_service.list_for_user(session, user_id, kind)
    return [InteractionResponse.model_validate(interaction) for interaction in interactions]


@router.get("", response_model=list[InteractionResponse])
async def get_my_interactions(
    session: AsyncSession = Depends(get_session),
    user_info: dict = Depends(get_current_user),
):
    return await _list_mine(session, user_info["user_id"], None)


@router.get("/likes", response_model=list[InteractionResponse])
async def get_my_likes(
    session: AsyncSession = Depends(get_session),
    user_info: dict = Depends(get_current_user),
):
    return await _list_mine(session, user_info["user_id"], InteractionKind.LIKE)


@router.get("/comments", response_model=list[InteractionResponse])
async def get_my_comments(
    session: AsyncSession = Depends(get_session),
    user_info: dict = Depends(get_current_user),
):
    return await _list_mine(session, user_info["user_id"], InteractionKind.COMMENT)


@router.get("/saved", response_model=list[InteractionResponse])
async def get_my_saved(
    session: AsyncSession = Depends(get_session),
    user_info: dict = Depends(get_current_user),
):
    return await _list_mine(session, user_info["user_id"], InteractionKind.SAVE)


@router.post("", response_model=InteractionCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_interaction(
    payload: InteractionCreateRequest,
    session: AsyncSession = Depends(get_session),
    user_info: dict = Depends(get_current_user),
):
    interaction, created = await interaction_service.add_interaction(
        session,
        user_info["user_id"],
        payload.subject_type,
        payload.subject_id,
        payload.kind,
        payload.content,
    )
    response = InteractionCreateResponse(
        message="Interação registrada" if created else "Interação já existe",
        interaction=InteractionResponse.model_validate(interaction),
    )
    if created:
        return response

    # 이미 있던 like/save는 200
    return JSONResponse(status_code=status.HTTP_200_OK, content=response.model_dump(mode="json", by_alias=True))


@router.delete("/{interaction_id}", response_model=MessageResponse)
async def delete_interaction(
    interaction_id: int = Path(gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_session),
    user_info: dict = Depends(get_current_user),
):
    await interaction_service.remove_interaction(session, user_info["user_id"], interaction_id)
    return MessageResponse(message="Interação removida")


@router.get("/subject/{subject_type}/{subject_id}", response_model=list[InteractionResponse])
async def get_subject_interactions(
    subject_type: SubjectType,
    subject_id: int = Path(gt=0, le=MAX_ID),
    kind: InteractionKind | None = Query(default=None),
    session: AsyncSession = Depends(get_session),
    user_info: dict = Depends(get_current_user),
):
    interactions = await interaction_service.list_for_subject(session, subject_type, subject_id, kind)
    return [InteractionResponse.model_validate(interaction) for interaction in interactions]
