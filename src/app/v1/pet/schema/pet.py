from datetime import datetime

from pydantic import Field

from src.app.common.schema.base import CamelModel
from src.app.common.utils.consts import PetSize, PetStatus, PetType


class PetCreateRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=64)
    pet_type: PetType
    pet_status: PetStatus
    size: PetSize
    breed: str | None = Field(None, max_length=64)
    description: str | None = None
    contact_phone: str | None = Field(None, max_length=20)


class PetResponse(CamelModel):
    id: int
    owner_id: int
    owner_username: str | None = None
    name: str
    pet_type: PetType
    pet_status: PetStatus
    size: PetSize
    breed: str | None = None
    description: str | None = None
    contact_phone: str | None = None
    likes_count: int
    comments_count: int
    created_at: datetime
    is_liked: bool = False
    is_saved: bool = False


class PetListResponse(CamelModel):
    next: str | None = None
    previous: str | None = None
    pets: list[PetResponse]
