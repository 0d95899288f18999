# app.py
import json
import logging
from contextlib import asynccontextmanager
from urllib.parse import urlparse

from fastapi import FastAPI, Request
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from a11y_advisor import cache, config
from a11y_advisor.core import orchestrator
from a11y_advisor.core.errors import AuditProcessError, ReportParseError, ValidationError
from a11y_advisor.models.schema import AuditBatchResponse, AuditRequest

# ---------- logging ----------
logging.basicConfig(level=config.LOG_LEVEL)
log = logging.getLogger("a11y-advisor")


# ---------- lifespan ----------
@asynccontextmanager
async def lifespan(app: FastAPI):
    config.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    log.info("Lighthouse reports will be written under %s", config.OUTPUT_DIR)
    await cache.init_cache()
    yield
    await cache.close_cache()


# ---------- app ----------
app = FastAPI(title="Accessibility Audit Advisor", version="1.0.0", lifespan=lifespan)


# ---------- error mapping ----------
@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(AuditProcessError)
async def audit_process_error_handler(request: Request, exc: AuditProcessError):
    return JSONResponse(
        status_code=502,
        content={"error": "Audit process failed", "url": exc.url, "detail": exc.stderr.strip()},
    )


@app.exception_handler(ReportParseError)
async def report_parse_error_handler(request: Request, exc: ReportParseError):
    return JSONResponse(
        status_code=500,
        content={"error": "Audit report unreadable", "url": exc.url, "detail": exc.reason},
    )


# ---------- request parsing ----------
def _is_absolute_url(value) -> bool:
    if not isinstance(value, str) or not value.strip():
        return False
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def parse_audit_request(raw: bytes) -> AuditRequest:
    if raw.strip():
        try:
            payload = json.loads(raw)
        except ValueError:
            raise ValidationError("Invalid input: body")
        if not isinstance(payload, dict):
            raise ValidationError("Invalid input: body")
    else:
        log.info("Empty request body, using fallback URL list")
        payload = {"urls": config.FALLBACK_URLS}

    urls = payload.get("urls")
    if not isinstance(urls, list) or not urls or not all(_is_absolute_url(u) for u in urls):
        raise ValidationError("Invalid input: urls")

    api_key = payload.get("apiKey")
    if not isinstance(api_key, str) or not api_key.strip():
        raise ValidationError("Invalid input: apiKey is required")

    return AuditRequest(urls=urls, apiKey=api_key)


# ---------- routes ----------
@app.get("/")
async def read_root():
    return FileResponse(config.PUBLIC_DIR / "index.html")


@app.get("/runaudit", response_class=PlainTextResponse)
async def runaudit_placeholder():
    return "Hello from runaudit"


@app.post("/runaudit", response_model=AuditBatchResponse)
async def run_audit(request: Request):
    audit_request = parse_audit_request(await request.body())
    log.info("Audit requested for %d URL(s)", len(audit_request.urls))

    results = await orchestrator.run_batch(audit_request.urls, audit_request.api_key)
    return AuditBatchResponse(results=results)


@app.get("/health")
async def health_check():
    return {"status": "ok"}


# mounted last so the routes above take precedence
app.mount("/", StaticFiles(directory=config.PUBLIC_DIR, check_dir=False), name="public")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
