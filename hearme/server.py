#!/usr/bin/env python3
"""
HearMe backend - FastAPI server storing speech, gesture, translate and SOS logs
in a JSON file.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional, Any

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from dotenv import load_dotenv

from .config import load_config
from .store import LogStore

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

cfg = load_config()
log_store = LogStore(cfg.server.log_path)


def get_store() -> LogStore:
    return log_store


# Request models. Payload fields accept any JSON value, like the web UI sends them.
class LogRequest(BaseModel):
    type: Any = None
    data: Any = None
    userId: Any = None


class SOSRequest(BaseModel):
    userId: Any = None
    location: Any = None
    message: Any = None


class TranslateRequest(BaseModel):
    text: Any = None
    target: Any = None
    userId: Any = None


def _present(value: Any) -> bool:
    """Missing, null, false, 0 and "" count as absent; {} and [] do not."""
    if value is None or value is False or value == "":
        return False
    if isinstance(value, (int, float)) and value == 0:
        return False
    return True


def _user_id(value: Any) -> str:
    return str(value) if _present(value) else "anonymous"


def _now_ms() -> int:
    return int(time.time() * 1000)


def _timestamp() -> str:
    """UTC ISO-8601 with milliseconds and a Z suffix"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def mock_translate(text: Any, target: Any) -> str:
    """Stand-in translator: tags the text with the target language."""
    return f"[{target} mock] {text}"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Make sure the log file exists before serving"""
    logger.info("🚀 Starting HearMe backend...")
    log_store.ensure()
    logger.info(f"✅ Log store ready at {log_store.path}")
    yield
    logger.info("🧹 Shutting down HearMe backend")


app = FastAPI(
    title="HearMe Backend API",
    description="Log storage, mock translation and SOS alerts",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies get the same 400 {"error": ...} shape as missing fields"""
    errors = exc.errors()
    detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    logger.warning(f"⚠️ Rejected {request.method} {request.url.path}: {detail}")
    return JSONResponse(status_code=400, content={"error": f"Invalid request body: {detail}"})


@app.get("/api/health")
async def health():
    """Health check endpoint"""
    return {"status": "ok", "time": _timestamp()}


@app.get("/api/logs")
async def get_logs(limit: Optional[int] = None, store: LogStore = Depends(get_store)):
    """Get recent logs, newest first"""
    if limit is None:
        limit = cfg.server.default_limit
    return store.recent(limit)


@app.post("/api/logs")
async def create_log(request: LogRequest, store: LogStore = Depends(get_store)):
    """Create a generic log (speech, gesture, emotion, translate, sos)"""
    if not _present(request.type) or not _present(request.data):
        return JSONResponse(status_code=400, content={"error": "Missing required fields: type, data"})

    entry = {
        "id": str(_now_ms()),
        "type": request.type,
        "userId": _user_id(request.userId),
        "data": request.data,
        "timestamp": _timestamp(),
    }
    store.add(entry)
    logger.info(f"📝 Stored {request.type} log for {entry['userId']}")
    return {"status": "ok", "entry": entry}


@app.post("/api/sos")
async def sos(request: SOSRequest, store: LogStore = Depends(get_store)):
    """Record an SOS alert"""
    entry = {
        "id": f"sos-{_now_ms()}",
        "type": "sos",
        "userId": _user_id(request.userId),
        "data": {
            "location": request.location if _present(request.location) else None,
            "message": request.message if _present(request.message) else None,
        },
        "timestamp": _timestamp(),
    }
    store.add(entry)
    # Only stored; no SMS/email delivery
    logger.warning(f"🆘 SOS recorded for {entry['userId']}")
    return {"status": "ok", "message": "SOS recorded", "entry": entry}


@app.post("/api/translate")
async def translate(request: TranslateRequest, store: LogStore = Depends(get_store)):
    """Mock translation endpoint"""
    if not _present(request.text) or not _present(request.target):
        return JSONResponse(status_code=400, content={"error": "Missing required fields: text, target"})

    translated_text = mock_translate(request.text, request.target)
    entry = {
        "id": f"translate-{_now_ms()}",
        "type": "translate",
        "userId": _user_id(request.userId),
        "data": {"original": request.text, "translated": translated_text, "target": request.target},
        "timestamp": _timestamp(),
    }
    store.add(entry)
    return {"status": "ok", "translatedText": translated_text}


def main():
    """Run the backend with uvicorn"""
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    logger.info(f"HearMe backend running on http://localhost:{cfg.server.port}")
    uvicorn.run(app, host=cfg.server.host, port=cfg.server.port, log_level="info")


if __name__ == "__main__":
    main()
