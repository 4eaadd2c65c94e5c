"""Static HTML frontend for DocInsight web UI."""

from __future__ import annotations

from functools import lru_cache
from html import escape
from importlib.resources import files

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from docinsight.config import AppConfig

router = APIRouter()

MODEL_PLACEHOLDER = "{{ model_id }}"


@lru_cache(maxsize=1)
def _load_template() -> str:
    template = files("docinsight.web").joinpath("templates", "index.html")
    return template.read_text(encoding="utf-8")


def render_index(model_id: str) -> str:
    """Fill the page template with the configured model name."""
    return _load_template().replace(MODEL_PLACEHOLDER, escape(model_id))


@router.get("/", response_class=HTMLResponse)
async def index() -> HTMLResponse:
    html = render_index(AppConfig.from_env().model_id)
    return HTMLResponse(content=html)
