from src.app.v1.interaction.entity.interaction import Interaction
from src.app.v1.pet.entity.pet import Pet
from src.app.v1.post.entity.post import Post
from src.app.v1.user.entity.user import User

from sqlalchemy.orm import configure_mappers

# 모든 모델이 import된 후에 configure_mappers 호출
configure_mappers()
# alembic이 인식 가능하게 model import

__all__ = ["Interaction", "Pet", "Post", "User"]
