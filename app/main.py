"""FastAPI entry point."""
from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1.router import router as api_router
from pagelens import __version__
from pagelens.config.log import configure_logging
from pagelens.config.settings import settings

configure_logging()

app = FastAPI(
    title="PageLens API",
    description="""
API for auditing HTML content for SEO and readability.

## Features

- **SEO checks**: headings, keyword placement and density, title and meta description width, image alt text, content length
- **Readability checks**: Flesch Reading Ease, paragraph and sentence length, subheading distribution
- **Mixed Chinese/English text**: word counts and rendered widths are language-aware
- **Scores**: impact-weighted SEO and readability scores blended 60/40 into an overall grade

## Usage

1. `POST /api/v1/pagelens` with the page HTML, URL, title and keywords
2. Read `report.detailedIssues` and `report.summary` from the response
""",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)


@app.exception_handler(HTTPException)
async def error_response_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Return ErrorResponse bodies as-is instead of nesting them under 'detail'."""
    if isinstance(exc.detail, dict) and "error" in exc.detail:
        content = exc.detail
    else:
        content = {"detail": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


# CORS middleware (for API cross-origin requests)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

# Mount API router
app.include_router(api_router, prefix="/api/v1")
