import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, APIRouter, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from intouch.core.config import settings
from intouch.core.logging import setup_logging
from intouch.core.error_handlers import (
    ErrorHandler,
    service_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    database_exception_handler,
    general_exception_handler
)
from intouch.db.database import SessionLocal, init_db
from intouch.db.repository import SqlMarketplaceRepository
from intouch.db.seed import seed_demo_data
from intouch.services.exceptions import ServiceException
from intouch.middleware import RateLimiter, CacheMiddleware
from intouch.api import auth, catalog, health, messages, search, specialists
from intouch.api import settings as settings_api

# Setup logging
logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    if settings.SEED_DEMO_DATA:
        db = SessionLocal()
        try:
            seed_demo_data(SqlMarketplaceRepository(db), settings.DEMO_PASSWORD)
        finally:
            db.close()
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
    Marketplace API connecting customers with service specialists in Lithuania:

    * Customer and specialist signup, login and session handling
    * Specialist search with filters, suggestions and recipient selection
    * `mailto:` hand-off and e-mail notifications for inquiries
    * Specialist profiles, settings, subscription plans and UI language

    ## Authentication

    Log in with `/v1/auth/login` and send the returned token as
    `Authorization: Bearer your_token_here`.
    """,
    version=settings.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Authentication",
            "description": "Signup, login, logout and password reset"
        },
        {
            "name": "Specialists",
            "description": "Specialist listings and profile maintenance"
        },
        {
            "name": "Search",
            "description": "Stateful search page with recipient selection"
        },
        {
            "name": "Messages",
            "description": "Message composition and inquiries to specialists"
        },
        {
            "name": "Settings",
            "description": "User settings, subscription plan and language"
        },
        {
            "name": "Catalog",
            "description": "Service categories, cities and UI strings"
        },
        {
            "name": "Health",
            "description": "API health check endpoints"
        }
    ],
    swagger_ui_parameters={"defaultModelsExpandDepth": -1}
)

logger.info(f"🌐 CORS Origins configured: {settings.CORS_ORIGINS}")
logger.info(f"🌍 Environment: {settings.ENVIRONMENT}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=600,  # Cache preflight requests for 10 minutes
)

# Middleware to block documentation endpoints in production
@app.middleware("http")
async def block_docs_in_production(request: Request, call_next):
    if settings.ENVIRONMENT == "production" and request.url.path in ["/docs", "/redoc", "/openapi.json"]:
        logger.warning(f"🔒 Blocked access to documentation endpoint: {request.url.path}")
        return ErrorHandler.create_error_response(
            status_code=status.HTTP_404_NOT_FOUND,
            message="Not Found",
            error_code="HTTP_ERROR"
        )

    return await call_next(request)

app.add_middleware(RateLimiter)
app.add_middleware(CacheMiddleware)

# Add error handlers
app.add_exception_handler(ServiceException, service_exception_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(SQLAlchemyError, database_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time

    logger.info(f"{request.method} {request.url.path} {response.status_code} "
          f"Completed in {process_time:.4f}s")

    return response

# API versioning
v1_router = APIRouter(prefix=settings.API_V1_STR)

v1_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
v1_router.include_router(specialists.router, prefix="/specialists", tags=["Specialists"])
v1_router.include_router(search.router, prefix="/search", tags=["Search"])
v1_router.include_router(messages.router, prefix="/messages", tags=["Messages"])
v1_router.include_router(settings_api.router, prefix="/settings", tags=["Settings"])
v1_router.include_router(catalog.router, prefix="/catalog", tags=["Catalog"])
v1_router.include_router(health.router, tags=["Health"])

app.include_router(v1_router)

@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
