import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.common.exceptions import (
    AppException,
    DuplicateInteraction,
    InvalidInput,
    NotFound,
    StorageFailure,
)
from src.app.common.utils.consts import (
    TOGGLE_KINDS,
    InteractionKind,
    InteractionState,
    SubjectType,
)
from src.app.v1.interaction.entity.interaction import Interaction
from src.app.v1.interaction.repository.counter_repository import CounterRepository
from src.app.v1.interaction.repository.interaction_repository import InteractionRepository
from src.app.v1.interaction.subjects import get_subject

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToggleResult:
    state: InteractionState
    count: int

    @property
    def present(self) -> bool:
        return self.state is InteractionState.PRESENT


class InteractionService:
    def __init__(
        self,
        interaction_repository: InteractionRepository | None = None,
        counter_repository: CounterRepository | None = None,
    ):
        self.interaction_repository = interaction_repository or InteractionRepository()
        self.counter_repository = counter_repository or CounterRepository(self.interaction_repository)

    async def ensure_subject(self, session: AsyncSession, subject_type: SubjectType, subject_id: int) -> None:
        """대상이 없으면 NotFound"""
        spec = get_subject(subject_type)
        if spec.entity is not None:
            query = select(spec.entity.id).where(spec.entity.id == subject_id)
        else:
            query = select(Interaction.id).where(
                Interaction.id == subject_id,
                Interaction.kind == InteractionKind.COMMENT,
            )

        result = await session.execute(query)
        if result.scalar_one_or_none() is None:
            logger.warning(f"{subject_type.value} {subject_id} not found")
            raise NotFound(spec.not_found_message)

    def _check_kind(self, subject_type: SubjectType, kind: InteractionKind) -> None:
        # 댓글은 좋아요만 가능
        if subject_type is SubjectType.COMMENT and kind is not InteractionKind.LIKE:
            raise InvalidInput("Comentários só podem ser curtidos")

    async def toggle(
        self,
        session: AsyncSession,
        user_id: int,
        subject_type: SubjectType,
        subject_id: int,
        kind: InteractionKind,
    ) -> ToggleResult:
        """ABSENT <-> PRESENT 전환 후 interactions 기준 개수 반환"""
        return await self._transition(session, user_id, subject_type, subject_id, kind, desired=None)

    async def set_state(
        self,
        session: AsyncSession,
        user_id: int,
        subject_type: SubjectType,
        subject_id: int,
        kind: InteractionKind,
        present: bool,
    ) -> ToggleResult:
        """요청한 상태로 맞춤, 이미 그 상태면 변경 없음"""
        return await self._transition(session, user_id, subject_type, subject_id, kind, desired=present)

    async def _transition(
        self,
        session: AsyncSession,
        user_id: int,
        subject_type: SubjectType,
        subject_id: int,
        kind: InteractionKind,
        desired: bool | None,
    ) -> ToggleResult:
        if kind not in TOGGLE_KINDS:
            raise InvalidInput("Tipo de interação inválido")
        self._check_kind(subject_type, kind)

        try:
            await self.ensure_subject(session, subject_type, subject_id)

            existing = await self.interaction_repository.find_interaction(
                session, user_id, subject_type, subject_id, kind
            )
            present = existing is not None
            target = (not present) if desired is None else desired

            if present and not target:
                await self.interaction_repository.delete_interaction(session, existing.id)
                logger.info(f"User {user_id} removed {kind.value} on {subject_type.value} {subject_id}")
            elif target and not present:
                await self.interaction_repository.insert_interaction(
                    session, user_id, subject_type, subject_id, kind
                )
                logger.info(f"User {user_id} added {kind.value} on {subject_type.value} {subject_id}")

            count = await self.counter_repository.sync_counter(session, subject_type, subject_id, kind)
            await session.commit()

        except AppException:
            await session.rollback()
            raise
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception(f"Failed to toggle {kind.value} on {subject_type.value} {subject_id}")
            raise StorageFailure() from e

        state = InteractionState.PRESENT if target else InteractionState.ABSENT
        return ToggleResult(state=state, count=count)

    async def add_comment(
        self,
        session: AsyncSession,
        user_id: int,
        subject_type: SubjectType,
        subject_id: int,
        content: str | None,
    ) -> Interaction:
        """댓글은 항상 새 행으로 추가 (토글 아님)"""
        text = (content or "").strip()
        if not text:
            raise InvalidInput("Conteúdo do comentário é obrigatório")
        if subject_type is SubjectType.COMMENT:
            raise InvalidInput("Não é possível comentar um comentário")

        try:
            await self.ensure_subject(session, subject_type, subject_id)

            comment = await self.interaction_repository.insert_interaction(
                session, user_id, subject_type, subject_id, InteractionKind.COMMENT, payload=text
            )
            await self.counter_repository.adjust_counter(
                session, subject_type, subject_id, InteractionKind.COMMENT, 1
            )
            await session.commit()

        except AppException:
            await session.rollback()
            raise
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception(f"Failed to add comment on {subject_type.value} {subject_id}")
            raise StorageFailure() from e

        logger.info(f"User {user_id} commented on {subject_type.value} {subject_id} (comment {comment.id})")
        return comment

    async def add_interaction(
        self,
        session: AsyncSession,
        user_id: int,
        subject_type: SubjectType,
        subject_id: int,
        kind: InteractionKind,
        content: str | None = None,
    ) -> tuple[Interaction, bool]:
        """(interaction, 새로 생성 여부). like/save는 이미 있으면 기존 행 반환"""
        if kind is InteractionKind.COMMENT:
            return await self.add_comment(session, user_id, subject_type, subject_id, content), True

        self._check_kind(subject_type, kind)

        try:
            await self.ensure_subject(session, subject_type, subject_id)

            existing = await self.interaction_repository.find_interaction(
                session, user_id, subject_type, subject_id, kind
            )
            if existing is not None:
                return existing, False

            interaction = await self.interaction_repository.insert_interaction(
                session, user_id, subject_type, subject_id, kind
            )
            await self.counter_repository.sync_counter(session, subject_type, subject_id, kind)
            await session.commit()

        except DuplicateInteraction:
            # 동시 요청이 먼저 삽입한 경우
            await session.rollback()
            existing = await self.interaction_repository.find_interaction(
                session, user_id, subject_type, subject_id, kind
            )
            if existing is None:
                raise
            return existing, False
        except AppException:
            await session.rollback()
            raise
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception(f"Failed to add {kind.value} on {subject_type.value} {subject_id}")
            raise StorageFailure() from e

        return interaction, True

    async def remove_interaction(self, session: AsyncSession, user_id: int, interaction_id: int) -> None:
        try:
            interaction = await self.interaction_repository.get_interaction(session, interaction_id)
            if interaction is None or interaction.user_id != user_id:
                raise NotFound("Interação não encontrada")
            if interaction.kind is InteractionKind.COMMENT:
                raise InvalidInput("Comentários não podem ser removidos")

            subject_type, subject_id, kind = interaction.subject_type, interaction.subject_id, interaction.kind
            await self.interaction_repository.delete_interaction(session, interaction_id)
            await self.counter_repository.sync_counter(session, subject_type, subject_id, kind)
            await session.commit()

        except AppException:
            await session.rollback()
            raise
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception(f"Failed to remove interaction {interaction_id}")
            raise StorageFailure() from e

        logger.info(f"User {user_id} removed interaction {interaction_id}")

    async def list_for_user(
        self, session: AsyncSession, user_id: int, kind: InteractionKind | None = None
    ) -> list[Interaction]:
        try:
            return await self.interaction_repository.list_interactions_for_user(session, user_id, kind)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to list interactions of user {user_id}")
            raise StorageFailure() from e

    async def list_for_subject(
        self,
        session: AsyncSession,
        subject_type: SubjectType,
        subject_id: int,
        kind: InteractionKind | None = None,
    ) -> list[Interaction]:
        try:
            await self.ensure_subject(session, subject_type, subject_id)
            return await self.interaction_repository.list_interactions_for_subject(
                session, subject_type, subject_id, kind
            )
        except SQLAlchemyError as e:
            logger.exception(f"Failed to list interactions of {subject_type.value} {subject_id}")
            raise StorageFailure() from e

    async def repair_counters(self, session: AsyncSession, subject_type: SubjectType) -> int:
        try:
            touched = await self.counter_repository.repair_counters(session, subject_type)
            await session.commit()
            return touched
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception(f"Failed to repair {subject_type.value} counters")
            raise StorageFailure() from e
