"""
FastAPI app assembly: logging, middleware, error mapping and router wiring.
"""
import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

load_dotenv()

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

from cms.errors import CmsError
from cms.api.content import router as content_router
from cms.api.team import router as team_router
from cms.api.homepage import router as homepage_router
from cms.api.schools import router as schools_router
from cms.api.support import router as support_router

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="NAPPS CMS Service",
    description="API for homepage content, team members, school enrollments, media uploads and admin email.",
    version="1.0.0",
)

DEFAULT_CORS_ORIGINS = "http://localhost,http://localhost:3000,http://localhost:8000"
origins = [o.strip() for o in os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CmsError)
async def cms_error_handler(request: Request, exc: CmsError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=422, content={
        "detail": "Request validation failed",
        "error": "ValidationError",
        "provider_detail": jsonable_encoder(exc.errors()),
    })


app.include_router(homepage_router)
app.include_router(content_router)
app.include_router(team_router)
app.include_router(schools_router)
app.include_router(support_router)
