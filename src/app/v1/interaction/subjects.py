"""상호작용 대상(subject) 타입별 엔티티, 카운터 컬럼, 404 메시지 매핑"""

from dataclasses import dataclass, field

from src.app.common.utils.consts import InteractionKind, SubjectType
from src.app.v1.pet.entity.pet import Pet
from src.app.v1.post.entity.post import Post


@dataclass(frozen=True)
class SubjectSpec:
    subject_type: SubjectType
    not_found_message: str
    entity: type | None = None
    counter_columns: dict[InteractionKind, str] = field(default_factory=dict)

    def counter_column(self, kind: InteractionKind):
        """kind에 대응하는 카운터 컬럼, 없으면 None"""
        if self.entity is None or kind not in self.counter_columns:
            return None
        return getattr(self.entity, self.counter_columns[kind])


_COUNTERS = {
    InteractionKind.LIKE: "like_count",
    InteractionKind.COMMENT: "comment_count",
}

SUBJECTS: dict[SubjectType, SubjectSpec] = {
    SubjectType.POST: SubjectSpec(SubjectType.POST, "Post não encontrado", Post, _COUNTERS),
    SubjectType.PET: SubjectSpec(SubjectType.PET, "Pet não encontrado", Pet, _COUNTERS),
    # 댓글은 interactions 테이블의 행 자체가 대상, 카운터 컬럼 없음
    SubjectType.COMMENT: SubjectSpec(SubjectType.COMMENT, "Comentário não encontrado"),
}


def get_subject(subject_type: SubjectType) -> SubjectSpec:
    return SUBJECTS[subject_type]
