from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.common.utils.consts import Visibility
from src.app.v1.post.entity.post import Post
from src.app.v1.post.schema.post import PostCreateRequest
from src.app.v1.user.entity.user import User


class PostRepository:

    @staticmethod
    def _to_dict(post: Post, user: User | None) -> dict:
        return {
            "id": post.id,
            "user_id": post.user_id,
            "username": user.username if user else None,
            "user_photo_url": user.profile_image if user else None,
            "content": post.content,
            "media_urls": post.media_urls or [],
            "visibility_type": post.visibility_type,
            "post_type": post.post_type,
            "likes_count": post.like_count,
            "comments_count": post.comment_count,
            "created_at": post.created_at,
        }

    async def create_post(self, session: AsyncSession, user_id: int, post: PostCreateRequest) -> Post:
        new_post = Post(
            user_id=user_id,
            content=post.content,
            media_urls=post.media_urls,
            visibility_type=post.visibility_type,
            post_type=post.post_type,
        )

        session.add(new_post)
        await session.commit()
        await session.refresh(new_post)

        return new_post

    async def get_post(self, session: AsyncSession, post_id: int) -> dict | None:
        # 게시글과 작성자 정보를 한 번에 조회
        query = select(Post, User).join(User, Post.user_id == User.id, isouter=True).where(Post.id == post_id)
        result = await session.execute(query)
        row = result.first()

        if not row:
            return None

        post, user = row
        return self._to_dict(post, user)

    async def get_posts(self, session: AsyncSession, page: int, page_size: int) -> tuple[list[dict], int]:
        """공개 게시글 목록 (최신순)과 전체 개수"""
        total_count_query = select(func.count(Post.id)).where(Post.visibility_type == Visibility.PUBLIC)
        total_count = (await session.execute(total_count_query)).scalar_one()

        query = (
            select(Post, User)
            .join(User, Post.user_id == User.id, isouter=True)
            .where(Post.visibility_type == Visibility.PUBLIC)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        result = await session.execute(query)

        return [self._to_dict(post, user) for post, user in result.all()], total_count

    async def get_posts_by_ids(self, session: AsyncSession, post_ids: list[int]) -> list[dict]:
        if not post_ids:
            return []

        query = (
            select(Post, User)
            .join(User, Post.user_id == User.id, isouter=True)
            .where(Post.id.in_(post_ids))
            .order_by(Post.created_at.desc(), Post.id.desc())
        )
        result = await session.execute(query)

        return [self._to_dict(post, user) for post, user in result.all()]
