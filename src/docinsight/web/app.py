"""FastAPI application backing the DocInsight web UI."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Literal

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from docinsight import __version__
from docinsight.analysis.service import DocumentAnalyzer
from docinsight.config import AppConfig
from docinsight.ingestion.extractors import load_document
from docinsight.llm.client import ErrorKind, GeminiClient, GenerationError
from docinsight.models import ConversationTurn
from docinsight.utils.files import UploadError
from docinsight.web.frontend import router as frontend_router

LOGGER = logging.getLogger(__name__)

MIN_ANALYSIS_CHARS = 100

app = FastAPI(title="DocInsight Web", version=__version__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(frontend_router)


class TextPayload(BaseModel):
    text: str = ""


class CompliancePayload(TextPayload):
    jurisdiction: str = "switzerland"


class TurnPayload(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str = ""
    question: str = ""
    conversation_history: List[TurnPayload] = Field(
        default_factory=list, alias="conversationHistory"
    )


def _build_analyzer() -> DocumentAnalyzer:
    try:
        config = AppConfig.from_env()
    except ValueError as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        raise HTTPException(status_code=500, detail=f"Invalid configuration: {exc}") from exc
    return DocumentAnalyzer(GeminiClient(config.generation_config()), config)


def _require_text(text: str, *, min_chars: int = 0) -> str:
    if not text:
        raise HTTPException(status_code=400, detail="Document text is required")
    if len(text) < min_chars:
        raise HTTPException(
            status_code=400,
            detail=f"Document text is too short (minimum {min_chars} characters)",
        )
    return text


def _generation_failure(exc: GenerationError, action: str) -> HTTPException:
    if exc.kind is ErrorKind.CONFIGURATION:
        detail = (
            "Gemini API key is not configured. Please set GEMINI_API_KEY in your .env file. "
            "Get your key from: https://makersuite.google.com/app/apikey"
        )
        return HTTPException(status_code=500, detail=detail)
    if exc.kind is ErrorKind.AUTHENTICATION:
        detail = (
            "Gemini API key is invalid or not set. Please check your .env file and ensure "
            "GEMINI_API_KEY is configured correctly."
        )
        return HTTPException(status_code=500, detail=detail)
    if exc.kind is ErrorKind.QUOTA:
        return HTTPException(status_code=429, detail=f"Failed to {action}: {exc}")
    status_code = 500 if exc.kind is ErrorKind.MODEL_NOT_FOUND else 502
    return HTTPException(status_code=status_code, detail=f"Failed to {action}: {exc}")


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.post("/upload")
async def upload_document(file: UploadFile | None = File(None)) -> dict[str, Any]:
    if file is None:
        raise HTTPException(status_code=400, detail="No file provided")

    data = await file.read()
    try:
        document = await asyncio.to_thread(
            load_document, file.filename or "", data, file.content_type
        )
    except UploadError as exc:
        LOGGER.info("Upload rejected: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return document.to_dict()


@app.post("/summarize")
async def summarize_document(payload: TextPayload) -> dict[str, str]:
    text = _require_text(payload.text, min_chars=MIN_ANALYSIS_CHARS)
    analyzer = _build_analyzer()
    try:
        summary = await asyncio.to_thread(analyzer.summarize, text)
    except GenerationError as exc:
        LOGGER.error("Summary generation error: %s", exc)
        raise _generation_failure(exc, "generate summary") from exc
    return {"summary": summary}


@app.post("/chat")
async def chat(payload: ChatPayload) -> dict[str, str]:
    text = _require_text(payload.text)
    question = payload.question.strip()
    if not question:
        raise HTTPException(status_code=400, detail="Question is required")

    history = [ConversationTurn(role=turn.role, content=turn.content) for turn in payload.conversation_history]
    analyzer = _build_analyzer()
    try:
        answer = await asyncio.to_thread(analyzer.answer_question, text, question, history)
    except GenerationError as exc:
        LOGGER.error("Chat error: %s", exc)
        raise _generation_failure(exc, "answer question") from exc
    return {"answer": answer.answer, "source": answer.source}


@app.post("/extract-insights")
async def extract_insights(payload: TextPayload) -> dict[str, List[str]]:
    text = _require_text(payload.text, min_chars=MIN_ANALYSIS_CHARS)
    analyzer = _build_analyzer()
    try:
        insights = await asyncio.to_thread(analyzer.extract_insights, text)
    except GenerationError as exc:
        LOGGER.error("Insights extraction error: %s", exc)
        raise _generation_failure(exc, "extract insights") from exc
    return insights.to_dict()


@app.post("/legal-compliance")
async def legal_compliance(payload: CompliancePayload) -> dict[str, Any]:
    text = _require_text(payload.text, min_chars=MIN_ANALYSIS_CHARS)
    analyzer = _build_analyzer()
    try:
        report = await asyncio.to_thread(analyzer.check_compliance, text, payload.jurisdiction)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except GenerationError as exc:
        LOGGER.error("Legal compliance check error: %s", exc)
        raise _generation_failure(exc, "check legal compliance") from exc
    return report.to_dict()
