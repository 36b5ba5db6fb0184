"""Create users, posts, pets and interactions tables

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(length=32), nullable=False, unique=True),
        sa.Column("email", sa.String(length=64), nullable=False, unique=True),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("city", sa.String(length=64), nullable=True),
        sa.Column("user_type", sa.String(length=11), nullable=False),
        sa.Column("profile_image", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "posts",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.BigInteger(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("media_urls", sa.JSON(), nullable=True),
        sa.Column("visibility_type", sa.String(length=9), nullable=False),
        sa.Column("post_type", sa.String(length=7), nullable=False),
        sa.Column("like_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("comment_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("like_count >= 0", name="check_positive_post_like_count"),
        sa.CheckConstraint("comment_count >= 0", name="check_positive_post_comment_count"),
    )
    op.create_index("ix_posts_user_id", "posts", ["user_id"], unique=False)

    op.create_table(
        "pets",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("owner_id", sa.BigInteger(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("pet_type", sa.String(length=5), nullable=False),
        sa.Column("pet_status", sa.String(length=8), nullable=False),
        sa.Column("size", sa.String(length=6), nullable=False),
        sa.Column("breed", sa.String(length=64), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("contact_phone", sa.String(length=20), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("like_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("comment_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("like_count >= 0", name="check_positive_pet_like_count"),
        sa.CheckConstraint("comment_count >= 0", name="check_positive_pet_comment_count"),
    )
    op.create_index("ix_pets_owner_id", "pets", ["owner_id"], unique=False)

    op.create_table(
        "interactions",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.BigInteger(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("subject_type", sa.String(length=7), nullable=False),
        sa.Column("subject_id", sa.BigInteger(), nullable=False),
        sa.Column("kind", sa.String(length=7), nullable=False),
        sa.Column("payload", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    # like/save는 (user, subject, kind) 당 한 행
    op.create_index(
        "uq_interactions_toggle",
        "interactions",
        ["user_id", "subject_type", "subject_id", "kind"],
        unique=True,
        postgresql_where=sa.text("kind IN ('like', 'save')"),
        sqlite_where=sa.text("kind IN ('like', 'save')"),
    )
    op.create_index("ix_interactions_subject", "interactions", ["subject_type", "subject_id", "kind"], unique=False)
    op.create_index("ix_interactions_user_kind", "interactions", ["user_id", "kind"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_interactions_user_kind", table_name="interactions")
    op.drop_index("ix_interactions_subject", table_name="interactions")
    op.drop_index("uq_interactions_toggle", table_name="interactions")
    op.drop_table("interactions")
    op.drop_index("ix_pets_owner_id", table_name="pets")
    op.drop_table("pets")
    op.drop_index("ix_posts_user_id", table_name="posts")
    op.drop_table("posts")
    op.drop_table("users")
