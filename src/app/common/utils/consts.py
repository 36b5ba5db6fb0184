from enum import Enum

from sqlalchemy import BigInteger, Integer

# SQLite는 INTEGER PRIMARY KEY만 자동 증가
BigIntId = BigInteger().with_variant(Integer, "sqlite")


class UserType(str, Enum):
    TUTOR = "tutor"
    DONOR = "doador"
    VOLUNTEER = "voluntario"
    VET = "veterinario"


class Visibility(str, Enum):
    PUBLIC = "public"
    FOLLOWERS = "followers"
    PRIVATE = "private"


class PostType(str, Enum):
    REGULAR = "regular"
    EVENT = "event"


class PetType(str, Enum):
    DOG = "dog"
    CAT = "cat"
    OTHER = "other"


class PetStatus(str, Enum):
    LOST = "lost"
    FOUND = "found"
    ADOPTION = "adoption"


class PetSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class SubjectType(str, Enum):
    POST = "post"
    PET = "pet"
    COMMENT = "comment"


class InteractionKind(str, Enum):
    LIKE = "like"
    SAVE = "save"
    COMMENT = "comment"


# 요청 id 상한 (BigIntId 범위)
MAX_ID = 2**63 - 1
MAX_PAGE = 2**31 - 1


# 사용자당 하나만 존재할 수 있는 (토글) 상호작용
TOGGLE_KINDS = (InteractionKind.LIKE, InteractionKind.SAVE)


def enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class InteractionState(str, Enum):
    ABSENT = "absent"
    PRESENT = "present"
