# roilens/infrastructure/llm/gemini_query_dispatcher.py
"""
Multi-image query dispatch to Gemini.

Uses the standard generateContent API: every queued screenshot goes out as an
inline image part of a single user turn, followed by one text instruction.
"""
import base64
import traceback
from typing import Any, Callable, Optional

from google import genai
from google.genai import types

from roilens.domain.services.i_query_dispatcher import IQueryDispatcher
from roilens.domain.services.i_profile_service import IProfileService
from roilens.domain.services.i_logger_service import ILoggerService
from roilens.domain.models.dispatch_models import DispatchRequest, TEXT_MODE_MODEL
from roilens.domain.common.result import Result
from roilens.domain.common.errors import (
    ConfigurationError, ErrorCode, TransientError, UpstreamError
)

IMAGE_MIME_TYPE = "image/jpeg"

_RATE_LIMIT_MARKERS = ("quota", "rate limit", "rate_limit", "ratelimit", "resource_exhausted",
                       "resource exhausted", "too many requests")


def build_user_prompt(image_count: int) -> str:
    return (
        f"Analyze these {image_count} screenshot(s) of a transcript/conversation.\n"
        "The screenshots are in chronological order. Focus on the most recent question or topic being discussed.\n"
        "Provide a helpful, concise response that the user can use immediately."
    )


def extract_response_text(response: Any) -> str:
    """Prefer the top-level text; fall back to the first part of the first candidate."""
    text = getattr(response, "text", None)
    if text:
        return text

    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return ""
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    if not parts:
        return ""
    return getattr(parts[0], "text", None) or ""


def classify_error(error: Exception) -> Result[str]:
    """Map an SDK exception onto the failure taxonomy."""
    message = str(error) or type(error).__name__
    lowered = message.lower()

    if "api key" in lowered or "api_key" in lowered:
        return Result.fail(ConfigurationError(
            message="Invalid API key",
            code=ErrorCode.INVALID_CREDENTIAL,
            inner_error=error
        ))
    if any(marker in lowered for marker in _RATE_LIMIT_MARKERS):
        return Result.fail(TransientError(
            message="API rate limit exceeded. Please wait and try again.",
            code=ErrorCode.RATE_LIMITED,
            inner_error=error
        ))
    if "model" in lowered:
        return Result.fail(UpstreamError(
            message=f"Model unavailable: {message}",
            code=ErrorCode.MODEL_UNAVAILABLE,
            details={"detail": message},
            inner_error=error
        ))
    return Result.fail(UpstreamError(
        message=message,
        code=ErrorCode.UPSTREAM_FAILURE,
        inner_error=error
    ))


class GeminiQueryDispatcher(IQueryDispatcher):
    """Sends a DispatchRequest to Gemini and normalizes the outcome."""

    def __init__(self, profile_service: IProfileService, logger: ILoggerService,
                 model: str = TEXT_MODE_MODEL,
                 client_factory: Optional[Callable[[str], Any]] = None):
        """
        Initialize the dispatcher.

        Args:
            profile_service: Builds the system instruction for a profile
            logger: Logger service
            model: Default model identifier
            client_factory: Creates an SDK client from an API key
        """
        self.profile_service = profile_service
        self.logger = logger
        self.model = model
        self.client_factory = client_factory or (lambda api_key: genai.Client(api_key=api_key))

    def dispatch(self, request: DispatchRequest, api_key: Optional[str],
                 model: Optional[str] = None) -> Result[str]:
        if not api_key or not request.images:
            return Result.fail(ConfigurationError(
                message="Missing API key or images",
                code=ErrorCode.MISSING_CREDENTIALS_OR_IMAGES
            ))

        model_name = model or self.model
        if request.override_query:
            # TODO: substitute override_query into build_user_prompt
            self.logger.debug("Override query received but not applied",
                              length=len(request.override_query))

        try:
            client = self.client_factory(api_key)

            parts = [
                types.Part.from_bytes(data=base64.b64decode(image), mime_type=IMAGE_MIME_TYPE)
                for image in request.images
            ]
            parts.append(types.Part.from_text(text=build_user_prompt(len(request.images))))

            system_prompt = self.profile_service.build_system_prompt(
                request.profile, request.custom_prompt, google_search_enabled=False
            )

            self.logger.info("Sending multi-image query", model=model_name,
                             images=len(request.images), profile=request.profile)
            response = client.models.generate_content(
                model=model_name,
                contents=[types.Content(role="user", parts=parts)],
                config=types.GenerateContentConfig(system_instruction=system_prompt)
            )

            text = extract_response_text(response)
            if not text:
                return Result.fail(UpstreamError(
                    message="No response text received from Gemini",
                    code=ErrorCode.EMPTY_RESPONSE
                ))

            self.logger.debug("Received response", length=len(text))
            return Result.ok(text)
        except Exception as e:
            self.logger.error(f"Gemini text mode error: {e}")
            self.logger.debug(traceback.format_exc())
            return classify_error(e)
