# fakecheck/main.py

"""
Thin HTTP caller around the engine. Rejects empty or malformed form input
before the engine runs, and keeps the recent-checks history for the page.
"""

from __future__ import annotations

from typing import Literal
import json
import logging

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from . import config
from .analyzer import security_tips
from .engine import check
from .history import RecentChecks
from .insights import live_insights
from .models import InputKind
from .utils.input_checks import PRECHECKS, InputRejected, require_input

if config.SENTRY_DSN:
    sentry_sdk.init(dsn=config.SENTRY_DSN, traces_sample_rate=0.2)

logger = logging.getLogger("fakecheck")
logging.basicConfig(level=config.LOG_LEVEL, format="%(message)s")

app = FastAPI(title="FakeCheck API")

RECENT_CHECKS = RecentChecks()


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.error(json.dumps({"event": "error", "path": str(request.url.path), "error": str(exc)}))
    return JSONResponse({"error": "Internal server error."}, status_code=500)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse({"error": "Invalid request.", "detail": exc.errors()}, status_code=422)


@app.exception_handler(InputRejected)
async def rejected_input_handler(request: Request, exc: InputRejected):
    return JSONResponse({"error": str(exc)}, status_code=422)


# ---------------------------------------------------------
# Models
# ---------------------------------------------------------
class CheckRequest(BaseModel):
    kind: Literal["phone", "url", "message"]
    content: str = Field(..., description="Phone number, URL or message text to check.")


class InsightsRequest(BaseModel):
    kind: Literal["phone", "url", "message"]
    content: str = ""


# ---------------------------------------------------------
# Routes
# ---------------------------------------------------------
@app.post("/check")
def run_check(body: CheckRequest):
    kind = InputKind(body.kind)
    content = require_input(body.content)
    problem = PRECHECKS[kind](content)
    if problem:
        raise InputRejected(problem)

    assessment = check(kind, content)
    RECENT_CHECKS.add(assessment)
    return assessment.model_dump(mode="json")


@app.post("/insights")
def insights(body: InsightsRequest):
    return live_insights(body.kind, body.content).model_dump(mode="json")


@app.get("/history")
def history():
    return {
        "limit": RECENT_CHECKS.limit,
        "items": [a.model_dump(mode="json") for a in RECENT_CHECKS],
    }


@app.get("/tips/{kind}")
def tips(kind: InputKind):
    return {"kind": kind.value, "tips": security_tips(kind)}
