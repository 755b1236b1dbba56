from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware
from core.config_loader import settings
from core.errors import DomainError
from core.logging_utils import setup_logging

from tenant.router import tenant_router
from role.router import role_router
from member.router import member_router
from template.router import template_router
from businessday.router import businessday_router
from attendance.router import attendance_router
from adjustment.router import adjustment_router
from shiftcalendar.router import calendar_router
from announcement.router import announcement_router, system_announcement_router
import models_bootstrap

setup_logging(settings.LOG_LEVEL, json_output=settings.LOG_JSON)

openapi_tags = [
    {
        "name": "business days",
        "description": "Business days and their shift slots",
    },
    {
        "name": "Health Checks",
        "description": "Application health checks",
    }
]

app = FastAPI(title=settings.PROJECT_NAME, openapi_tags=openapi_tags)

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            str(origin).strip("/") for origin in settings.BACKEND_CORS_ORIGINS
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


app.include_router(tenant_router, prefix="/api")
app.include_router(role_router, prefix="/api")
app.include_router(member_router, prefix="/api")
app.include_router(template_router, prefix="/api")
app.include_router(businessday_router, prefix="/api")
app.include_router(attendance_router, prefix="/api")
app.include_router(adjustment_router, prefix="/api")
app.include_router(calendar_router, prefix="/api")
app.include_router(announcement_router, prefix="/api")
app.include_router(system_announcement_router, prefix="/api")


@app.get("/health", tags=['Health Checks'])
def read_root():
    return {"health": "true"}
