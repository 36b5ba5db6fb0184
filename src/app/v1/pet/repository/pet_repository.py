from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.common.utils.consts import PetStatus
from src.app.v1.pet.entity.pet import Pet
from src.app.v1.pet.schema.pet import PetCreateRequest
from src.app.v1.user.entity.user import User


class PetRepository:

    @staticmethod
    def _to_dict(pet: Pet, owner: User | None) -> dict:
        return {
            "id": pet.id,
            "owner_id": pet.owner_id,
            "owner_username": owner.username if owner else None,
            "name": pet.name,
            "pet_type": pet.pet_type,
            "pet_status": pet.pet_status,
            "size": pet.size,
            "breed": pet.breed,
            "description": pet.description,
            "contact_phone": pet.contact_phone,
            "likes_count": pet.like_count,
            "comments_count": pet.comment_count,
            "created_at": pet.created_at,
        }

    async def create_pet(self, session: AsyncSession, owner_id: int, pet: PetCreateRequest) -> Pet:
        new_pet = Pet(owner_id=owner_id, **pet.model_dump())

        session.add(new_pet)
        await session.commit()
        await session.refresh(new_pet)

        return new_pet

    async def get_pet(self, session: AsyncSession, pet_id: int) -> dict | None:
        query = select(Pet, User).join(User, Pet.owner_id == User.id, isouter=True).where(Pet.id == pet_id)
        result = await session.execute(query)
        row = result.first()

        if not row:
            return None

        pet, owner = row
        return self._to_dict(pet, owner)

    async def get_pets(
        self, session: AsyncSession, page: int, page_size: int, pet_status: PetStatus | None = None
    ) -> tuple[list[dict], int]:
        """활성 상태인 반려동물 목록 (최신순)과 전체 개수"""
        conditions = [Pet.is_active.is_(True)]
        if pet_status is not None:
            conditions.append(Pet.pet_status == pet_status)

        total_count = (await session.execute(select(func.count(Pet.id)).where(*conditions))).scalar_one()

        query = (
            select(Pet, User)
            .join(User, Pet.owner_id == User.id, isouter=True)
            .where(*conditions)
            .order_by(Pet.created_at.desc(), Pet.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        result = await session.execute(query)

        return [self._to_dict(pet, owner) for pet, owner in result.all()], total_count
