"""
Artfolio AI-content gate — FastAPI application.

Run locally:
    uvicorn artfolio.main:app --reload
"""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Load environment variables before settings-dependent modules are imported
load_dotenv()

from artfolio.api import system, validation  # noqa: E402
from artfolio.config import settings  # noqa: E402
from artfolio.integrations import http_client  # noqa: E402

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    await http_client.initialize()
    logger.info(f"[STARTUP] Artfolio gate ready (environment={settings.environment})")
    yield
    await http_client.close()
    logger.info("[SHUTDOWN] Artfolio gate stopped")


app = FastAPI(title="Artfolio AI-Content Gate", lifespan=lifespan)


# Error responses must carry CORS headers too, otherwise the browser hides the
# JSON body (e.g. "Invalid file type") behind a generic network error.
@app.exception_handler(StarletteHTTPException)
async def custom_http_exception_handler(request: Request, exc: StarletteHTTPException):
    headers = dict(getattr(exc, "headers", None) or {})
    headers["Access-Control-Allow-Origin"] = "*"
    headers["Access-Control-Allow-Credentials"] = "true"
    headers["Access-Control-Allow-Methods"] = "*"
    headers["Access-Control-Allow-Headers"] = "*"

    # Drain the rest of an early-rejected upload so the connection isn't reset
    try:
        async for _ in request.stream():
            pass
    except Exception as e:
        logger.warning(f"Error draining request stream in exception handler: {e}")

    logger.info(f"[ERROR HANDLER] Returning {exc.status_code} to client: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers,
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(system.router)
app.include_router(validation.router)


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8000"))
    uvicorn.run("artfolio.main:app", host="0.0.0.0", port=port, log_level="info")
