import asyncio
import random
import string

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.common.utils.consts import (
    InteractionKind,
    PetSize,
    PetStatus,
    PetType,
    PostType,
    SubjectType,
    UserType,
)
from src.app.v1.interaction.service.interaction_service import InteractionService
from src.app.v1.pet.entity.pet import Pet
from src.app.v1.post.entity.post import Post
from src.app.v1.user.entity.user import User
from src.config.database import SessionLocal
from src.config.database.postgresql import Base, engine

# 순서 기반 인덱스
username_counter = 0

CITIES = ["São Paulo", "Rio de Janeiro", "Belo Horizonte", "Curitiba", "Porto Alegre", "Recife"]
FIRST_NAMES = ["Ana", "Bruno", "Carla", "Diego", "Elisa", "Felipe", "Gabriela", "Heitor", "Isabela", "João"]
PET_NAMES = ["Rex", "Mel", "Thor", "Luna", "Bob", "Nina", "Pipoca", "Fred", "Amora", "Paçoca"]
BREEDS = ["SRD", "Labrador", "Poodle", "Siamês", "Persa", "Vira-lata caramelo", None]
POST_CONTENTS = [
    "Passeio no parque hoje!",
    "Alguém conhece um bom veterinário na região?",
    "Feira de adoção neste sábado, apareçam!",
    "Olha a carinha dele dormindo",
    "Primeiro banho em casa nova",
]
COMMENTS = ["Que fofo!", "Cute!", "Lindo demais", "Compartilhei", "Quero adotar!"]


# 랜덤 문자열 생성
def random_string(length: int) -> str:
    return "".join(random.choices(string.ascii_lowercase + string.digits, k=length))


def generate_ordered_username() -> str:
    global username_counter
    username = f"{FIRST_NAMES[username_counter % len(FIRST_NAMES)].lower()}{username_counter}"
    username_counter += 1
    return username


async def insert_users(session: AsyncSession, num_users: int) -> list[User]:
    users = []
    for _ in range(num_users):
        username = generate_ordered_username()
        user = User(
            username=username,
            email=f"{username}@example.com",
            name=f"{random.choice(FIRST_NAMES)} {random_string(4).capitalize()}",
            city=random.choice(CITIES),
            user_type=random.choice(list(UserType)),
            profile_image=None,
        )
        session.add(user)
        users.append(user)

    await session.flush()  # User ID 확보
    return users


async def insert_posts(session: AsyncSession, users: list[User], num_posts: int) -> list[Post]:
    posts = []
    for _ in range(num_posts):
        post = Post(
            user_id=random.choice(users).id,
            content=random.choice(POST_CONTENTS),
            media_urls=[],
            post_type=PostType.EVENT if random.random() < 0.1 else PostType.REGULAR,
        )
        session.add(post)
        posts.append(post)

    await session.flush()
    return posts


async def insert_pets(session: AsyncSession, users: list[User], num_pets: int) -> list[Pet]:
    pets = []
    for _ in range(num_pets):
        pet = Pet(
            owner_id=random.choice(users).id,
            name=random.choice(PET_NAMES),
            pet_type=random.choice(list(PetType)),
            pet_status=random.choice(list(PetStatus)),
            size=random.choice(list(PetSize)),
            breed=random.choice(BREEDS),
            description=None,
            contact_phone=f"119{random.randint(10000000, 99999999)}",
        )
        session.add(pet)
        pets.append(pet)

    await session.flush()
    return pets


# 카운터가 interactions와 맞도록 서비스를 통해 생성
async def insert_interactions(session: AsyncSession, users: list[User], subjects: list[tuple[SubjectType, int]]):
    service = InteractionService()
    user_ids = [user.id for user in users]

    for subject_type, subject_id in subjects:
        for user_id in random.sample(user_ids, k=random.randint(0, min(5, len(user_ids)))):
            await service.toggle(session, user_id, subject_type, subject_id, InteractionKind.LIKE)
            if random.random() < 0.3:
                await service.toggle(session, user_id, subject_type, subject_id, InteractionKind.SAVE)
            if random.random() < 0.4:
                await service.add_comment(session, user_id, subject_type, subject_id, random.choice(COMMENTS))


async def main(num_users: int = 20, num_posts: int = 50, num_pets: int = 30):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as session:
        try:
            users = await insert_users(session, num_users)
            posts = await insert_posts(session, users, num_posts)
            pets = await insert_pets(session, users, num_pets)
            await session.commit()
        except Exception as e:
            print(f"데이터 삽입 중 오류 발생: {e}")
            await session.rollback()
            raise

        subjects = [(SubjectType.POST, post.id) for post in posts] + [(SubjectType.PET, pet.id) for pet in pets]
        await insert_interactions(session, users, subjects)

    print(f"사용자 {num_users}명, 게시글 {num_posts}개, 반려동물 {num_pets}마리를 생성했습니다.")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
