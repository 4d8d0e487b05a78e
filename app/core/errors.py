"""
errors.py

서비스 계층 예외 정의 및 전역 예외 핸들러.

서비스(services) 계층은 HTTP를 알지 못하므로 HTTPException 대신
아래 예외들을 발생시키고, 이 파일의 핸들러가 이를
{"success": false, "error": "..."} 형태의 JSON 응답으로 변환한다.

예외 분류:
- ValidationFailed (400) : 입력값 누락/형식 오류, 대상 상태가 작업에 부적합
- PermissionDenied (403) : 필요한 권한 없음
- NotFound         (404) : 동아리 / 요청 / 회원 없음
- Conflict         (409) : 이미 claim된 동아리, 이미 처리된 요청 등
- OperationFailed  (500) : 예기치 못한 DB 오류 (롤백 후 발생)
- 그 외 모든 예외  (500) : "Internal server error"

설계 원칙:
- 권한 오류 메시지는 필요한 권한 종류만 알려주고 내부 판단 이유는 숨김
- 500 오류는 "Failed to ..." 형태의 일반 메시지만 응답, 상세는 서버 로그로

"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(ServiceError):
    status_code = 400


class PermissionDenied(ServiceError):
    status_code = 403


class NotFound(ServiceError):
    status_code = 404


class Conflict(ServiceError):
    status_code = 409


class OperationFailed(ServiceError):
    status_code = 500


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    # loc 예: ("body", "userId")
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    if first.get("type") == "missing":
        return f"{field} is required" if field else "Request body is required"
    return f"Invalid {field}: {first.get('msg')}" if field else f"Invalid request: {first.get('msg')}"


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exc_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exc_handler(request: Request, exc: RequestValidationError):
        message = _describe_validation_error(exc)
        logger.debug("Validation error on %s: %s", request.url.path, message)
        return error_response(400, message)

    # 처리되지 않은 예외 (트랜잭션 밖 조회 중 DB 오류 등)도 같은 JSON 형태로 응답
    @app.exception_handler(Exception)
    async def unhandled_exc_handler(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s (%s)", request.method, request.url.path, type(exc).__name__, exc_info=exc)
        return error_response(500, "Internal server error")
