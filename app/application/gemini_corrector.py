from typing import Any, Optional
import httpx
from app.core.config import Settings
from app.core.logging_config import logger
from app.domain.models import (
    ApiError,
    CorrectionResult,
    CorrectionSuccess,
    MalformedResponse,
    ViewModel,
)

EMPTY_TEXT_MESSAGE = "Please enter some text"
NO_CORRECTION_MESSAGE = "No correction found or unexpected API response format."
NETWORK_ERROR_MESSAGE = "Error: Unable to process the request. Please check your network or API key."
UNKNOWN_API_ERROR = {"message": "Unknown API error"}
API_ERROR_FALLBACK = "Unable to process the request."

TEMPERATURE = 0.7
MAX_OUTPUT_TOKENS = 1000

PROMPT_TEMPLATE = (
    "You are an expert grammar assistant. Correct the spelling and grammar in the following text.\n"
    "IMPORTANT: Preserve the original line breaks from the user's input. Process each line independently.\n"
    "Correct this text:\n"
    "\"{text}\""
)


def build_prompt(text: str) -> str:
    # str.format would choke on braces inside the user's text
    return PROMPT_TEMPLATE.replace("{text}", text, 1)


def build_payload(text: str) -> dict:
    return {
        "contents": [
            {
                "role": "user",
                "parts": [{"text": build_prompt(text)}],
            }
        ],
        "generationConfig": {
            "temperature": TEMPERATURE,
            "maxOutputTokens": MAX_OUTPUT_TOKENS,
        },
    }


def extract_correction(data: Any) -> CorrectionResult:
    """
    Walk candidates[0].content.parts[0].text of a generateContent body.
    Any missing or mistyped step yields MalformedResponse.
    """
    # a JSON null body counts as malformed rather than as a crash
    if not isinstance(data, dict):
        return MalformedResponse()

    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return MalformedResponse()

    candidate = candidates[0]
    if not isinstance(candidate, dict):
        return MalformedResponse()

    content = candidate.get("content")
    if not isinstance(content, dict):
        return MalformedResponse()

    parts = content.get("parts")
    if not isinstance(parts, list) or not parts:
        return MalformedResponse()

    part = parts[0]
    if not isinstance(part, dict) or not isinstance(part.get("text"), str):
        return MalformedResponse()

    return CorrectionSuccess(text=part["text"].strip())


def extract_error_message(payload: Any) -> str:
    """error.message, then message, then a fixed fallback."""
    # non-dict payloads (including null) fall back to the fixed message
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict):
            nested = error.get("message")
            if isinstance(nested, str) and nested:
                return nested
        message = payload.get("message")
        if isinstance(message, str) and message:
            return message
    return API_ERROR_FALLBACK


def classify_response(response: httpx.Response) -> CorrectionResult:
    if not response.is_success:
        try:
            payload = response.json()
        except ValueError:
            payload = dict(UNKNOWN_API_ERROR)
        return ApiError(
            status=response.status_code,
            reason=response.reason_phrase,
            message=extract_error_message(payload),
            payload=payload,
        )

    # invalid JSON on a 2xx raises here and is handled by the caller
    return extract_correction(response.json())


def render_result(text: str, result: CorrectionResult) -> ViewModel:
    if isinstance(result, CorrectionSuccess):
        return ViewModel(originaltext=text, corrected=result.text)
    if isinstance(result, ApiError):
        return ViewModel(
            originaltext=text,
            corrected=f"Error from API ({result.status}): {result.message}",
        )
    return ViewModel(originaltext=text, corrected=NO_CORRECTION_MESSAGE)


class GeminiCorrector:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.transport = transport
        logger.info(f"Corrector ready with model {settings.gemini_model}")

    @property
    def endpoint(self) -> str:
        base = self.settings.gemini_base_url.rstrip("/")
        return f"{base}/models/{self.settings.gemini_model}:generateContent"

    async def request_correction(self, text: str) -> CorrectionResult:
        async with httpx.AsyncClient(
            timeout=self.settings.request_timeout,
            transport=self.transport,
        ) as client:
            response = await client.post(
                self.endpoint,
                params={"key": self.settings.gemini_api_key},
                json=build_payload(text),
                headers={"Content-Type": "application/json"},
            )
        return classify_response(response)

    async def correct(self, text: Optional[str]) -> ViewModel:
        if not text:
            return ViewModel(originaltext=text or "", corrected=EMPTY_TEXT_MESSAGE)

        try:
            result = await self.request_correction(text)

            if isinstance(result, ApiError):
                logger.error(
                    f"Gemini API Error: {result.status} {result.reason} {result.payload}"
                )
            elif isinstance(result, MalformedResponse):
                logger.warning("Gemini response did not contain a correction")

            return render_result(text, result)
        except Exception as e:
            logger.exception(f"Fetch error: {e}")
            return ViewModel(originaltext=text, corrected=NETWORK_ERROR_MESSAGE)
