"""요청/응답 로깅 미들웨어 — Axiom 전송 또는 JSON 로그.

Request/response logging middleware.
Each API call is recorded as one structured event (method, path, params,
body, status code, duration, error reason). Events go to Axiom when
AXIOM_API_TOKEN and AXIOM_DATASET are configured, otherwise to the JSON
application logger. Sensitive fields (password, token, secret) are masked.
"""

import json
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings
from app.utils.logger import get_logger

logger = get_logger("http")

# 마스킹 대상 필드 패턴 — Fields to mask in request/response bodies
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|access_token|refresh_token|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}


def _mask_dict(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else _mask_dict(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask_dict(item, depth + 1) for item in data[:20]]
    return data


def _truncate(value: Any, max_len: int = 2000) -> Any:
    """로그 크기 제한 — Truncate large values to prevent oversized logs."""
    if isinstance(value, str) and len(value) > max_len:
        return value[:max_len] + "...(truncated)"
    return value


async def _read_json_body(request: Request) -> Any:
    """요청 body를 마스킹된 JSON으로 읽습니다 (POST/PUT/PATCH 전용)."""
    try:
        body_bytes = await request.body()
        if not body_bytes:
            return None
        return _truncate(_mask_dict(json.loads(body_bytes)))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return "(non-json body)"


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 로깅하는 미들웨어.

    Middleware that logs all API requests and responses.
    Captures: method, path, query params, request body, status code, error detail.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    def _emit(self, log_event: dict[str, Any]) -> None:
        """이벤트 전송 — Axiom 또는 JSON 로거.

        An ingest failure is reported on the JSON logger and never breaks
        the request.
        """
        if self._client is None:
            level = logger.warning if log_event["status_code"] >= 500 else logger.info
            level("api request", extra=log_event)
            return
        try:
            self._client.ingest_events(self._dataset, [log_event])
        except Exception:
            logger.exception("axiom ingest failed", extra={"path": log_event["path"]})

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 제외 경로 스킵 — Skip excluded paths
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.time()

        # 요청 데이터 수집 — Collect request data
        method = request.method
        path = request.url.path
        query_params = dict(request.query_params) if request.query_params else None

        request_body: Any = None
        if method in ("POST", "PUT", "PATCH"):
            request_body = await _read_json_body(request)

        # 응답 처리 — Process response
        error_detail: str | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출 — Extract error detail from error responses
            if status_code >= 400:
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")

                try:
                    error_data = json.loads(resp_body)
                    error_detail = error_data.get("detail", str(error_data))
                    if not isinstance(error_detail, str):
                        error_detail = json.dumps(error_detail, default=str)
                    error_detail = error_detail[:500]
                except (json.JSONDecodeError, UnicodeDecodeError, AttributeError):
                    error_detail = resp_body.decode("utf-8", errors="replace")[:500]

                # 소비한 body를 다시 응답으로 반환 — Re-wrap consumed body
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            log_event: dict[str, Any] = {
                "method": method,
                "path": path,
                "status_code": status_code,
                "duration_ms": round((time.time() - start_time) * 1000, 2),
            }
            if query_params:
                log_event["query_params"] = _mask_dict(query_params)
            if request_body is not None:
                log_event["request_body"] = request_body
            if error_detail:
                log_event["error"] = error_detail
            self._emit(log_event)

        return response
