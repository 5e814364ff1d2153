# app/main.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from app.config import settings
from app.core.logger import setup_logging
from app.core.errors import AnalysisError, InvalidInput
from app.api.v1.endpoints import router as v1_router

log = setup_logging(settings.LOG_LEVEL)
app = FastAPI(
    title="PR Review Report API",
    version="1.0.0",
    docs_url="/api/docs",
    openapi_url="/api/openapi.json",
)

@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError):
    log.warning("analysis_failed", path=request.url.path, status=exc.status_code, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # the only body field is the PR URL
    return JSONResponse(status_code=InvalidInput.status_code, content={"error": InvalidInput().message})

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    log.exception("unhandled_error", path=request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc) or "Unknown error"})

@app.get("/health")
async def health():
    return {"status": "healthy", "service": settings.APP_NAME}

app.include_router(v1_router, prefix="/api/v1", tags=["analysis"])
