"""v1 API 라우터 패키지 — 모든 v1 엔드포인트 통합.

v1 API Router package — Aggregates every v1 endpoint into a single router
for inclusion in the FastAPI application under ``/api/v1``.

Included routers:
    - profiles: 프로필 조회/수정 (Profile read/update)
    - organizations: 조직 CRUD (Organization CRUD)
    - shifts: 시프트 CRUD (Shift CRUD)
    - analytics: 월간/회계연도 요약 (Monthly and financial-year summaries)
    - hooks: 신원 이벤트 웹훅, 서비스 역할 전용 (Identity webhooks, service role)
"""

from fastapi import APIRouter

from app.api.v1.analytics import router as analytics_router
from app.api.v1.hooks import router as hooks_router
from app.api.v1.organizations import router as organizations_router
from app.api.v1.profiles import router as profiles_router
from app.api.v1.shifts import router as shifts_router

api_router: APIRouter = APIRouter()

api_router.include_router(profiles_router, prefix="/profiles", tags=["Profiles"])
api_router.include_router(organizations_router, prefix="/organizations", tags=["Organizations"])
api_router.include_router(shifts_router, prefix="/shifts", tags=["Shifts"])
api_router.include_router(analytics_router, prefix="/analytics", tags=["Analytics"])
api_router.include_router(hooks_router, prefix="/hooks", tags=["Identity Hooks"])
