import logging
from typing import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.common.exceptions import DuplicateInteraction
from src.app.common.utils.consts import TOGGLE_KINDS, InteractionKind, SubjectType
from src.app.v1.interaction.entity.interaction import TOGGLE_KIND_PREDICATE, Interaction

logger = logging.getLogger(__name__)

_UNIQUE_TUPLE = ["user_id", "subject_type", "subject_id", "kind"]


class InteractionRepository:

    async def get_interaction(self, session: AsyncSession, interaction_id: int) -> Interaction | None:
        return await session.get(Interaction, interaction_id)

    async def find_interaction(
        self,
        session: AsyncSession,
        user_id: int,
        subject_type: SubjectType,
        subject_id: int,
        kind: InteractionKind,
    ) -> Interaction | None:
        """like/save (user, subject, kind) 튜플 조회, uq_interactions_toggle로 최대 한 행"""
        query = (
            select(Interaction)
            .where(
                Interaction.user_id == user_id,
                Interaction.subject_type == subject_type,
                Interaction.subject_id == subject_id,
                Interaction.kind == kind,
            )
        )
        result = await session.execute(query)
        return result.scalar_one_or_none()

    async def insert_interaction(
        self,
        session: AsyncSession,
        user_id: int,
        subject_type: SubjectType,
        subject_id: int,
        kind: InteractionKind,
        payload: str | None = None,
    ) -> Interaction:
        if kind not in TOGGLE_KINDS:
            interaction = Interaction(
                user_id=user_id,
                subject_type=subject_type,
                subject_id=subject_id,
                kind=kind,
                payload=payload or "",
            )
            session.add(interaction)
            await session.flush()
            await session.refresh(interaction)
            return interaction

        # like/save: 존재 확인과 삽입을 한 문장으로 (insert-if-absent)
        insert = pg_insert if session.bind.dialect.name == "postgresql" else sqlite_insert
        stmt = (
            insert(Interaction)
            .values(
                user_id=user_id,
                subject_type=subject_type,
                subject_id=subject_id,
                kind=kind,
                payload="",
            )
            .on_conflict_do_nothing(index_elements=_UNIQUE_TUPLE, index_where=TOGGLE_KIND_PREDICATE)
            .returning(Interaction.id)
        )
        result = await session.execute(stmt)
        new_id = result.scalar_one_or_none()

        if new_id is None:
            logger.warning(f"Duplicate {kind.value} by user {user_id} on {subject_type.value} {subject_id}")
            raise DuplicateInteraction()

        return await session.get(Interaction, new_id)

    async def delete_interaction(self, session: AsyncSession, interaction_id: int) -> bool:
        result = await session.execute(delete(Interaction).where(Interaction.id == interaction_id))
        return result.rowcount > 0

    async def list_interactions_for_subject(
        self,
        session: AsyncSession,
        subject_type: SubjectType,
        subject_id: int,
        kind: InteractionKind | None = None,
    ) -> list[Interaction]:
        query = select(Interaction).where(
            Interaction.subject_type == subject_type,
            Interaction.subject_id == subject_id,
        )
        if kind is not None:
            query = query.where(Interaction.kind == kind)
        query = query.order_by(Interaction.created_at.desc(), Interaction.id.desc())

        result = await session.execute(query)
        return list(result.scalars().all())

    async def list_interactions_for_user(
        self,
        session: AsyncSession,
        user_id: int,
        kind: InteractionKind | None = None,
    ) -> list[Interaction]:
        query = select(Interaction).where(Interaction.user_id == user_id)
        if kind is not None:
            query = query.where(Interaction.kind == kind)
        query = query.order_by(Interaction.created_at.desc(), Interaction.id.desc())

        result = await session.execute(query)
        return list(result.scalars().all())

    async def count_interactions(
        self,
        session: AsyncSession,
        subject_type: SubjectType,
        subject_id: int,
        kind: InteractionKind,
    ) -> int:
        """비정규화 카운터가 아닌 실제 행 개수"""
        query = select(func.count(Interaction.id)).where(
            Interaction.subject_type == subject_type,
            Interaction.subject_id == subject_id,
            Interaction.kind == kind,
        )
        result = await session.execute(query)
        return result.scalar_one()

    async def count_interactions_by_subject(
        self,
        session: AsyncSession,
        subject_type: SubjectType,
        subject_ids: Iterable[int],
        kind: InteractionKind,
    ) -> dict[int, int]:
        ids = list(subject_ids)
        if not ids:
            return {}

        query = (
            select(Interaction.subject_id, func.count(Interaction.id))
            .where(
                Interaction.subject_type == subject_type,
                Interaction.subject_id.in_(ids),
                Interaction.kind == kind,
            )
            .group_by(Interaction.subject_id)
        )
        result = await session.execute(query)
        return {subject_id: count for subject_id, count in result.all()}

    async def find_viewer_interactions(
        self,
        session: AsyncSession,
        user_id: int,
        subject_type: SubjectType,
        subject_ids: Iterable[int],
        kinds: Iterable[InteractionKind] = TOGGLE_KINDS,
    ) -> set[tuple[int, InteractionKind]]:
        """한 페이지의 대상들에 대한 사용자 상호작용을 IN (...) 쿼리 한 번으로 조회"""
        ids = list(subject_ids)
        if not ids:
            return set()

        query = select(Interaction.subject_id, Interaction.kind).where(
            Interaction.user_id == user_id,
            Interaction.subject_type == subject_type,
            Interaction.subject_id.in_(ids),
            Interaction.kind.in_(list(kinds)),
        )
        result = await session.execute(query)
        return {(subject_id, kind) for subject_id, kind in result.all()}
