from pathlib import Path
from typing import Optional
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from app.application.gemini_corrector import GeminiCorrector
from app.core.config import Settings, settings
from app.core.logging_config import logger
from app.domain.models import CorrectionRequest, ViewModel

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

router = APIRouter()
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
corrector = GeminiCorrector(settings)


def get_settings() -> Settings:
    return settings


def get_corrector() -> GeminiCorrector:
    return corrector


def render_index(request: Request, view: ViewModel):
    return templates.TemplateResponse(request, "index.html", view.model_dump())


@router.get("/", response_class=HTMLResponse)
async def index(request: Request):
    return render_index(request, ViewModel(originaltext="", corrected=""))


@router.post("/correct", response_class=HTMLResponse)
async def correct(
    request: Request,
    text: Optional[str] = Form(None),
    corrector: GeminiCorrector = Depends(get_corrector),
):
    payload = CorrectionRequest(text=text)
    logger.info(f"Received correction request ({len(payload.text or '')} chars)")
    view = await corrector.correct(payload.text)
    return render_index(request, view)


@router.get("/health")
async def health_check(config: Settings = Depends(get_settings)):
    return {
        "status": "healthy",
        "model": config.gemini_model,
        "api_key_configured": bool(config.gemini_api_key),
    }
