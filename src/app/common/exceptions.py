import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppException(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Erro interno do servidor"

    def __init__(self, message: str | None = None):
        super().__init__(status_code=self.status_code, detail=message or self.message)


class Unauthenticated(AppException):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Não autenticado"

    def __init__(self, message: str | None = None):
        super().__init__(message)
        self.headers = {"WWW-Authenticate": "Bearer"}


class NotFound(AppException):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Não encontrado"


class InvalidInput(AppException):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Dados inválidos"


class DuplicateInteraction(AppException):
    status_code = status.HTTP_409_CONFLICT
    message = "Interação já existe"


class StorageFailure(AppException):
    # 내부 오류 내용은 서버 로그에만 남기고 클라이언트에는 일반 메시지만 전달
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Erro ao acessar o banco de dados"


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": InvalidInput.message, "errors": jsonable_encoder(exc.errors())},
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unexpected error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": AppException.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore
    app.add_exception_handler(Exception, unhandled_exception_handler)
