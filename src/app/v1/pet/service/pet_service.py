import logging
import os

from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.common.exceptions import NotFound, StorageFailure
from src.app.common.utils.consts import InteractionKind, PetStatus, SubjectType
from src.app.v1.interaction.service.feed_service import FeedService
from src.app.v1.interaction.service.interaction_service import InteractionService, ToggleResult
from src.app.v1.pet.repository.pet_repository import PetRepository
from src.app.v1.pet.schema.pet import PetCreateRequest, PetListResponse, PetResponse

load_dotenv()

logger = logging.getLogger(__name__)

PAGE_SIZE = 20
HOST = os.getenv("HOST", "127.0.0.1:8000")


class PetService:
    def __init__(self):
        self.pet_repository = PetRepository()
        self.interaction_service = InteractionService()
        self.feed_service = FeedService()

    async def create_pet(self, session: AsyncSession, owner_id: int, pet: PetCreateRequest) -> PetResponse:
        try:
            new_pet = await self.pet_repository.create_pet(session, owner_id, pet)
            row = await self.pet_repository.get_pet(session, new_pet.id)
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception(f"Failed to register pet for user {owner_id}")
            raise StorageFailure() from e

        logger.info(f"User {owner_id} registered pet {new_pet.id} ({pet.pet_status.value})")
        return PetResponse(**row)

    async def get_pet(self, session: AsyncSession, pet_id: int, viewer_id: int | None) -> PetResponse:
        try:
            row = await self.pet_repository.get_pet(session, pet_id)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to load pet {pet_id}")
            raise StorageFailure() from e

        if row is None:
            raise NotFound("Pet não encontrado")

        [row] = await self.feed_service.annotate(session, SubjectType.PET, [row], viewer_id)
        return PetResponse(**row)

    async def get_pets(
        self, session: AsyncSession, page: int, viewer_id: int | None, pet_status: PetStatus | None = None
    ) -> PetListResponse:
        try:
            rows, total_count = await self.pet_repository.get_pets(session, page, PAGE_SIZE, pet_status)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to load pets page {page}")
            raise StorageFailure() from e

        rows = await self.feed_service.annotate(session, SubjectType.PET, rows, viewer_id)

        base_url = f"http://{HOST}/api/pets"
        status_query = f"&status={pet_status.value}" if pet_status else ""
        next_page = f"{base_url}?page={page + 1}{status_query}" if (page * PAGE_SIZE) < total_count else None
        previous_page = f"{base_url}?page={page - 1}{status_query}" if page > 1 else None

        return PetListResponse(next=next_page, previous=previous_page, pets=[PetResponse(**row) for row in rows])

    async def like_pet(
        self, session: AsyncSession, user_id: int, pet_id: int, like: bool | None = None
    ) -> ToggleResult:
        if like is None:
            return await self.interaction_service.toggle(session, user_id, SubjectType.PET, pet_id, InteractionKind.LIKE)

        return await self.interaction_service.set_state(
            session, user_id, SubjectType.PET, pet_id, InteractionKind.LIKE, present=like
        )

    async def save_pet(
        self, session: AsyncSession, user_id: int, pet_id: int, save: bool | None = None
    ) -> ToggleResult:
        if save is None:
            return await self.interaction_service.toggle(session, user_id, SubjectType.PET, pet_id, InteractionKind.SAVE)

        return await self.interaction_service.set_state(
            session, user_id, SubjectType.PET, pet_id, InteractionKind.SAVE, present=save
        )
