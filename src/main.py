import logging
import os
import sys
from pathlib import Path

# 프로젝트 루트 디렉토리를 sys.path에 추가
# 상단에 위치 필수 !
project_root = Path(__file__).parent.parent
sys.path.append(str(project_root))

from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# 여기부터 router 추가
from src.app.common.exceptions import register_exception_handlers
from src.app.router import (
    comment_router,
    interaction_router,
    pet_router,
    post_router,
)
from src.config.database import engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("YaoPets API starting")
    yield

    # 커넥션 풀 정리
    await engine.dispose()
    logger.info("YaoPets API stopped")


main_router = APIRouter(prefix="/api")


# 각 라우터를 메인 라우터에 포함
main_router.include_router(post_router)
main_router.include_router(pet_router)
main_router.include_router(comment_router)
main_router.include_router(interaction_router)


app = FastAPI(title="YaoPets API", lifespan=lifespan)
app.include_router(main_router)
register_exception_handlers(app)


origins = [origin.strip() for origin in os.environ.get("CORS_ORIGINS", "").split(",") if origin.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=600,
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)
