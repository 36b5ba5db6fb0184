from datetime import datetime

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.app.common.utils.consts import BigIntId, PostType, Visibility, enum_values
from src.config.database import Base


class Post(Base):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True, nullable=False)
    user_id: Mapped[int] = mapped_column(BigIntId, ForeignKey("users.id"), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    media_urls: Mapped[list | None] = mapped_column(JSON, nullable=True)
    visibility_type: Mapped[Visibility] = mapped_column(
        Enum(Visibility, name="visibility_enum", native_enum=False, values_callable=enum_values),
        default=Visibility.PUBLIC,
        nullable=False,
    )
    post_type: Mapped[PostType] = mapped_column(
        Enum(PostType, name="post_type_enum", native_enum=False, values_callable=enum_values),
        default=PostType.REGULAR,
        nullable=False,
    )
    # 아래 두 카운터는 CounterRepository만 수정
    like_count: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    comment_count: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())

    __table_args__ = (
        CheckConstraint("like_count >= 0", name="check_positive_post_like_count"),
        CheckConstraint("comment_count >= 0", name="check_positive_post_comment_count"),
    )
