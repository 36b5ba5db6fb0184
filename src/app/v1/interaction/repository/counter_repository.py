import logging

from sqlalchemy import case, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.common.utils.consts import InteractionKind, SubjectType
from src.app.v1.interaction.entity.interaction import Interaction
from src.app.v1.interaction.repository.interaction_repository import InteractionRepository
from src.app.v1.interaction.subjects import get_subject

logger = logging.getLogger(__name__)


class CounterRepository:
    """like_count / comment_count를 수정하는 유일한 경로"""

    def __init__(self, interaction_repository: InteractionRepository | None = None):
        self.interaction_repository = interaction_repository or InteractionRepository()

    async def adjust_counter(
        self,
        session: AsyncSession,
        subject_type: SubjectType,
        subject_id: int,
        kind: InteractionKind,
        delta: int,
    ) -> None:
        """max(0, 현재값 + delta)를 UPDATE 한 문장으로 적용"""
        spec = get_subject(subject_type)
        column = spec.counter_column(kind)
        if column is None:
            return

        await session.execute(
            update(spec.entity)
            .where(spec.entity.id == subject_id)
            .values({column: case((column + delta < 0, 0), else_=column + delta)})
            .execution_options(synchronize_session=False)
        )

    async def sync_counter(
        self,
        session: AsyncSession,
        subject_type: SubjectType,
        subject_id: int,
        kind: InteractionKind,
    ) -> int:
        """interactions 테이블 기준으로 카운터를 다시 계산하고 그 값을 반환"""
        spec = get_subject(subject_type)
        column = spec.counter_column(kind)
        if column is not None:
            count_subquery = (
                select(func.count(Interaction.id))
                .where(
                    Interaction.subject_type == subject_type,
                    Interaction.subject_id == subject_id,
                    Interaction.kind == kind,
                )
                .scalar_subquery()
            )
            await session.execute(
                update(spec.entity)
                .where(spec.entity.id == subject_id)
                .values({column: count_subquery})
                .execution_options(synchronize_session=False)
            )

        return await self.interaction_repository.count_interactions(session, subject_type, subject_id, kind)

    async def repair_counters(self, session: AsyncSession, subject_type: SubjectType) -> int:
        """해당 타입의 모든 대상 카운터를 재계산, 갱신된 행 수 반환"""
        spec = get_subject(subject_type)
        if spec.entity is None:
            return 0

        touched = 0
        for kind in spec.counter_columns:
            count_subquery = (
                select(func.count(Interaction.id))
                .where(
                    Interaction.subject_type == subject_type,
                    Interaction.subject_id == spec.entity.id,
                    Interaction.kind == kind,
                )
                .scalar_subquery()
            )
            result = await session.execute(
                update(spec.entity)
                .values({spec.counter_column(kind): count_subquery})
                .execution_options(synchronize_session=False)
            )
            touched = max(touched, result.rowcount)

        logger.info(f"Repaired counters of {touched} {subject_type.value} rows")
        return touched
