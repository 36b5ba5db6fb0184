import pytest
from sqlalchemy.exc import IntegrityError

from src.app.common.exceptions import DuplicateInteraction
from src.app.common.utils.consts import InteractionKind, SubjectType
from src.app.v1.interaction.entity.interaction import Interaction
from src.app.v1.interaction.repository.interaction_repository import InteractionRepository


@pytest.fixture
def repository():
    return InteractionRepository()


@pytest.mark.asyncio
async def test_insert_like_twice_raises_duplicate(db_session, seed_data, repository):
    first = await repository.insert_interaction(db_session, 5, SubjectType.POST, 42, InteractionKind.LIKE)
    assert first.id is not None
    assert first.payload == ""

    with pytest.raises(DuplicateInteraction) as exc_info:
        await repository.insert_interaction(db_session, 5, SubjectType.POST, 42, InteractionKind.LIKE)

    assert exc_info.value.status_code == 409
    assert await repository.count_interactions(db_session, SubjectType.POST, 42, InteractionKind.LIKE) == 1


@pytest.mark.asyncio
async def test_like_and_save_are_independent_tuples(db_session, seed_data, repository):
    await repository.insert_interaction(db_session, 5, SubjectType.POST, 42, InteractionKind.LIKE)
    await repository.insert_interaction(db_session, 5, SubjectType.POST, 42, InteractionKind.SAVE)
    await repository.insert_interaction(db_session, 4, SubjectType.POST, 42, InteractionKind.LIKE)
    # 같은 id라도 subject_type이 다르면 다른 대상
    await repository.insert_interaction(db_session, 5, SubjectType.PET, 42, InteractionKind.LIKE)

    assert await repository.count_interactions(db_session, SubjectType.POST, 42, InteractionKind.LIKE) == 2
    assert await repository.count_interactions(db_session, SubjectType.POST, 42, InteractionKind.SAVE) == 1
    assert await repository.count_interactions(db_session, SubjectType.PET, 42, InteractionKind.LIKE) == 1


@pytest.mark.asyncio
async def test_unique_index_rejects_duplicate_rows(db_session, seed_data):
    for _ in range(2):
        db_session.add(
            Interaction(user_id=5, subject_type=SubjectType.POST, subject_id=42, kind=InteractionKind.SAVE)
        )

    with pytest.raises(IntegrityError):
        await db_session.flush()


@pytest.mark.asyncio
async def test_comments_may_repeat(db_session, seed_data, repository):
    for text in ("Cute!", "Cute!"):
        await repository.insert_interaction(
            db_session, 5, SubjectType.POST, 42, InteractionKind.COMMENT, payload=text
        )

    comments = await repository.list_interactions_for_subject(
        db_session, SubjectType.POST, 42, InteractionKind.COMMENT
    )
    assert len(comments) == 2
    assert {comment.payload for comment in comments} == {"Cute!"}


@pytest.mark.asyncio
async def test_delete_interaction(db_session, seed_data, repository):
    like = await repository.insert_interaction(db_session, 5, SubjectType.POST, 42, InteractionKind.LIKE)

    assert await repository.delete_interaction(db_session, like.id) is True
    assert await repository.delete_interaction(db_session, like.id) is False
    assert await repository.find_interaction(db_session, 5, SubjectType.POST, 42, InteractionKind.LIKE) is None


@pytest.mark.asyncio
async def test_list_for_user_newest_first(db_session, seed_data, repository):
    like = await repository.insert_interaction(db_session, 5, SubjectType.POST, 42, InteractionKind.LIKE)
    save = await repository.insert_interaction(db_session, 5, SubjectType.POST, 42, InteractionKind.SAVE)
    await repository.insert_interaction(db_session, 3, SubjectType.POST, 42, InteractionKind.LIKE)

    mine = await repository.list_interactions_for_user(db_session, 5)
    assert [i.id for i in mine] == [save.id, like.id]

    saved = await repository.list_interactions_for_user(db_session, 5, InteractionKind.SAVE)
    assert [i.id for i in saved] == [save.id]


@pytest.mark.asyncio
async def test_find_viewer_interactions(db_session, seed_data, repository):
    await repository.insert_interaction(db_session, 5, SubjectType.POST, 42, InteractionKind.LIKE)
    await repository.insert_interaction(db_session, 5, SubjectType.POST, 43, InteractionKind.SAVE)
    await repository.insert_interaction(db_session, 4, SubjectType.POST, 44, InteractionKind.LIKE)

    found = await repository.find_viewer_interactions(db_session, 5, SubjectType.POST, [42, 43, 44])

    assert found == {(42, InteractionKind.LIKE), (43, InteractionKind.SAVE)}
    assert await repository.find_viewer_interactions(db_session, 5, SubjectType.POST, []) == set()


@pytest.mark.asyncio
async def test_count_interactions_by_subject(db_session, seed_data, repository):
    for user_id in (1, 2, 3):
        await repository.insert_interaction(db_session, user_id, SubjectType.COMMENT, 100, InteractionKind.LIKE)
    await repository.insert_interaction(db_session, 1, SubjectType.COMMENT, 101, InteractionKind.LIKE)

    counts = await repository.count_interactions_by_subject(
        db_session, SubjectType.COMMENT, [100, 101, 102], InteractionKind.LIKE
    )

    assert counts == {100: 3, 101: 1}
