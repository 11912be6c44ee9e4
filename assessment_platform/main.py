from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import logging

from assessment_platform.core.config import settings
from assessment_platform.api.router import api_router
from assessment_platform.db.database import get_db
from assessment_platform.middleware.error_handler import setup_error_middleware

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Assessment Platform API",
    description="Backend API for authoring, taking and reviewing candidate assessments",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

setup_error_middleware(app)

@app.middleware("http")
async def security_headers_middleware(request: Request, call_next):
    """Add security headers to all responses."""
    response = await call_next(request)

    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

    if settings.is_production:
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

    return response

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_PREFIX)


@app.on_event("startup")
async def startup_event():
    """Open the data store so a broken collection file fails fast."""
    db = app.dependency_overrides.get(get_db, get_db)()
    logger.info(f"Assessment Platform API ready: {db.counts()}")


@app.get("/")
async def root():
    """API information."""
    return {
        "message": "Assessment Platform API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": f"{settings.API_PREFIX}/health"
    }


def run():
    """Console entry point."""
    import uvicorn

    uvicorn.run(
        "assessment_platform.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=not settings.is_production
    )


if __name__ == "__main__":
    run()
