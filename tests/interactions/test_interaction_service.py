import pytest

from src.app.common.exceptions import InvalidInput, NotFound
from src.app.common.utils.consts import InteractionKind, InteractionState, SubjectType
from src.app.v1.interaction.service.interaction_service import InteractionService
from src.app.v1.pet.entity.pet import Pet
from src.app.v1.post.entity.post import Post


@pytest.fixture
def service():
    return InteractionService()


async def _counters(session, entity, subject_id):
    item = await session.get(entity, subject_id)
    await session.refresh(item)
    return item.like_count, item.comment_count


@pytest.mark.asyncio
async def test_toggle_alternates_state(db_session, seed_data, service):
    states = []
    for _ in range(4):
        result = await service.toggle(db_session, 5, SubjectType.POST, 42, InteractionKind.LIKE)
        states.append((result.state, result.count))

    assert states == [
        (InteractionState.PRESENT, 1),
        (InteractionState.ABSENT, 0),
        (InteractionState.PRESENT, 1),
        (InteractionState.ABSENT, 0),
    ]


@pytest.mark.asyncio
async def test_counter_equals_authoritative_count(db_session, seed_data, service):
    for user_id in (1, 2, 3, 4):
        await service.toggle(db_session, user_id, SubjectType.PET, 7, InteractionKind.LIKE)
    await service.toggle(db_session, 2, SubjectType.PET, 7, InteractionKind.LIKE)

    count = await service.interaction_repository.count_interactions(db_session, SubjectType.PET, 7, InteractionKind.LIKE)
    like_count, _ = await _counters(db_session, Pet, 7)

    assert count == 3
    assert like_count == 3


@pytest.mark.asyncio
async def test_set_state_is_idempotent(db_session, seed_data, service):
    first = await service.set_state(db_session, 5, SubjectType.POST, 42, InteractionKind.SAVE, present=True)
    second = await service.set_state(db_session, 5, SubjectType.POST, 42, InteractionKind.SAVE, present=True)

    assert first.present and second.present
    assert second.count == 1

    removed = await service.set_state(db_session, 5, SubjectType.POST, 42, InteractionKind.SAVE, present=False)
    again = await service.set_state(db_session, 5, SubjectType.POST, 42, InteractionKind.SAVE, present=False)

    assert removed.state is InteractionState.ABSENT
    assert again.count == 0


@pytest.mark.asyncio
async def test_toggle_missing_subject(db_session, seed_data, service):
    with pytest.raises(NotFound) as exc_info:
        await service.toggle(db_session, 5, SubjectType.POST, 99999, InteractionKind.LIKE)

    assert exc_info.value.detail == "Post não encontrado"

    with pytest.raises(NotFound) as exc_info:
        await service.toggle(db_session, 5, SubjectType.PET, 99999, InteractionKind.SAVE)

    assert exc_info.value.detail == "Pet não encontrado"


@pytest.mark.asyncio
async def test_toggle_rejects_comment_kind(db_session, seed_data, service):
    with pytest.raises(InvalidInput):
        await service.toggle(db_session, 5, SubjectType.POST, 42, InteractionKind.COMMENT)


@pytest.mark.asyncio
async def test_add_comment_appends(db_session, seed_data, service):
    first = await service.add_comment(db_session, 5, SubjectType.POST, 42, "  Cute!  ")
    second = await service.add_comment(db_session, 5, SubjectType.POST, 42, "Cute!")

    assert first.id != second.id
    assert first.payload == "Cute!"
    assert (await _counters(db_session, Post, 42))[1] == 2

    comments = await service.list_for_subject(db_session, SubjectType.POST, 42, InteractionKind.COMMENT)
    assert [c.id for c in comments] == [second.id, first.id]


@pytest.mark.asyncio
async def test_add_comment_rejects_blank_content(db_session, seed_data, service):
    with pytest.raises(InvalidInput):
        await service.add_comment(db_session, 5, SubjectType.POST, 42, "   ")

    assert (await _counters(db_session, Post, 42))[1] == 0


@pytest.mark.asyncio
async def test_comment_like_uses_store_count(db_session, seed_data, service):
    comment = await service.add_comment(db_session, 1, SubjectType.POST, 42, "Que fofo")

    liked = await service.toggle(db_session, 5, SubjectType.COMMENT, comment.id, InteractionKind.LIKE)
    assert liked.present
    assert liked.count == 1

    with pytest.raises(InvalidInput):
        await service.toggle(db_session, 5, SubjectType.COMMENT, comment.id, InteractionKind.SAVE)

    with pytest.raises(NotFound):
        await service.toggle(db_session, 5, SubjectType.COMMENT, 99999, InteractionKind.LIKE)


@pytest.mark.asyncio
async def test_add_interaction_returns_existing(db_session, seed_data, service):
    created, is_new = await service.add_interaction(db_session, 5, SubjectType.POST, 42, InteractionKind.LIKE)
    existing, is_new_again = await service.add_interaction(db_session, 5, SubjectType.POST, 42, InteractionKind.LIKE)

    assert is_new is True
    assert is_new_again is False
    assert existing.id == created.id
    assert (await _counters(db_session, Post, 42))[0] == 1


@pytest.mark.asyncio
async def test_remove_interaction(db_session, seed_data, service):
    like, _ = await service.add_interaction(db_session, 5, SubjectType.POST, 42, InteractionKind.LIKE)
    comment, _ = await service.add_interaction(
        db_session, 5, SubjectType.POST, 42, InteractionKind.COMMENT, content="Cute!"
    )
    # 실패 시 rollback으로 객체가 만료되므로 id를 먼저 보관
    like_id, comment_id = like.id, comment.id

    # 다른 사용자의 상호작용은 없는 것으로 취급
    with pytest.raises(NotFound):
        await service.remove_interaction(db_session, 4, like_id)

    with pytest.raises(InvalidInput):
        await service.remove_interaction(db_session, 5, comment_id)

    await service.remove_interaction(db_session, 5, like_id)

    assert await _counters(db_session, Post, 42) == (0, 1)


@pytest.mark.asyncio
async def test_repair_counters(db_session, seed_data, service):
    await service.toggle(db_session, 1, SubjectType.POST, 42, InteractionKind.LIKE)

    assert await service.repair_counters(db_session, SubjectType.POST) == 1
    assert (await _counters(db_session, Post, 42))[0] == 1
