"""Main FastAPI application.

Entry point for the STEM answer verification service.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from stem_verifier.api.dependencies import get_settings
from stem_verifier.api.routes import verification
from stem_verifier.shared.logging_config import configure_logging, get_logger

# Configure logging
settings = get_settings()
configure_logging(settings.log_level)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Logs which verification methods are active. Missing credentials are not
    an error: each domain falls back to its local check.
    """
    logger.info(f"Starting {settings.api_title} v{settings.api_version}")

    if settings.math_oracle_configured:
        logger.info("Math verification: Wolfram Alpha")
    else:
        logger.warning("WOLFRAM_APP_ID is not set - math limited to binary arithmetic")

    if settings.sandbox_configured:
        logger.info(f"Code verification: Judge0 at {settings.judge0_base_url}")
    else:
        logger.warning("JUDGE0_API_KEY is not set - code verification limited to syntax linting")

    yield

    logger.info(f"Shutting down {settings.api_title}")


app = FastAPI(
    lifespan=lifespan,
    title=settings.api_title,
    version=settings.api_version,
    summary=settings.api_description,
    description="""
# STEM Answer Verification

Checks AI-generated mathematics, chemistry and code answers against ground
truth before they reach a learner.

Every request returns a typed verdict with a confidence score:

| Path | Confidence |
|------|------------|
| Exact local arithmetic, accepted sandbox run | 1.0 |
| Wolfram Alpha result | 0.95 |
| Atom-balance check | 0.9 |
| Syntax linting | 0.6 |
| Sandbox run that did not pass | 0.5 |
| Any failure to verify | 0.0 |
""",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(verification.router)


@app.get("/", include_in_schema=False)
async def root() -> RedirectResponse:
    """Redirect to the interactive API docs."""
    return RedirectResponse(url="/docs")


@app.get("/health", tags=["Health & Status"], summary="Service health check")
async def health_check():
    """Service health check endpoint.

    Returns:
        Dictionary containing service status and which oracles are configured
    """
    return {
        "status": "healthy",
        "service": settings.api_title,
        "version": settings.api_version,
        "math_oracle": settings.math_oracle_configured,
        "sandbox": settings.sandbox_configured,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "stem_verifier.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.log_level.lower(),
    )
