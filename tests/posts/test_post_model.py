import pytest
from sqlalchemy.exc import IntegrityError

from src.app.common.utils.consts import PostType, Visibility
from src.app.v1.post.entity.post import Post
from src.app.v1.user.entity.user import User


class TestPostModel:
    @pytest.mark.asyncio
    async def test_create_post_with_valid_data(self, db_session):
        user = User(username="tutor", email="tutor@example.com", name="Tutor")
        db_session.add(user)
        await db_session.commit()

        self.post_data = {
            "user_id": user.id,
            "content": "Primeiro passeio do Thor",
            "media_urls": ["http://example.com/thor.png"],
        }

        post = Post(**self.post_data)

        db_session.add(post)
        await db_session.commit()
        await db_session.refresh(post)

        result = await db_session.get(Post, post.id)

        assert result.user_id == self.post_data["user_id"]
        assert result.content == self.post_data["content"]
        assert result.media_urls == self.post_data["media_urls"]
        assert result.visibility_type == Visibility.PUBLIC
        assert result.post_type == PostType.REGULAR
        assert result.like_count == 0
        assert result.comment_count == 0
        assert result.created_at is not None

    @pytest.mark.asyncio
    async def test_negative_counter_rejected(self, db_session):
        user = User(username="tutor", email="tutor@example.com", name="Tutor")
        db_session.add(user)
        await db_session.commit()

        db_session.add(Post(user_id=user.id, content="contador", like_count=-1))

        with pytest.raises(IntegrityError):
            await db_session.commit()
