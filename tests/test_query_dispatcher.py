"""Tests for multi-image Gemini dispatch with a mocked client."""

import base64
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from roilens.domain.common.errors import ErrorCategory, ErrorCode
from roilens.domain.models.dispatch_models import DispatchRequest
from roilens.infrastructure.llm.gemini_query_dispatcher import (
    GeminiQueryDispatcher, TEXT_MODE_MODEL, build_user_prompt, classify_error, extract_response_text
)

IMAGES = [base64.b64encode(f"jpeg-{i}".encode()).decode("ascii") for i in range(3)]


def response_with_text(text):
    return SimpleNamespace(text=text, candidates=[])


@pytest.fixture
def client():
    client = MagicMock()
    client.models.generate_content.return_value = response_with_text("Say this.")
    return client


@pytest.fixture
def client_factory(client):
    return MagicMock(return_value=client)


@pytest.fixture
def profile_service():
    profiles = MagicMock()
    profiles.build_system_prompt.return_value = "SYSTEM PROMPT"
    return profiles


@pytest.fixture
def dispatcher(profile_service, logger, client_factory):
    return GeminiQueryDispatcher(profile_service, logger, client_factory=client_factory)


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------

class TestPreconditions:
    @pytest.mark.parametrize("api_key, images", [
        (None, IMAGES),
        ("", IMAGES),
        ("key", []),
    ])
    def test_missing_key_or_images_fails_without_client(self, dispatcher, client_factory, api_key, images):
        result = dispatcher.dispatch(DispatchRequest(images=images, profile="interview"), api_key)

        assert result.is_failure
        assert result.error.code == ErrorCode.MISSING_CREDENTIALS_OR_IMAGES
        assert result.error.message == "Missing API key or images"
        assert result.error.category is ErrorCategory.CONFIGURATION
        client_factory.assert_not_called()


# ---------------------------------------------------------------------------
# Request construction
# ---------------------------------------------------------------------------

class TestRequest:
    def test_success_returns_text(self, dispatcher, client_factory):
        result = dispatcher.dispatch(DispatchRequest(images=IMAGES, profile="sales"), "secret")

        assert result.is_success
        assert result.value == "Say this."
        client_factory.assert_called_once_with("secret")

    def test_parts_keep_queue_order_then_instruction(self, dispatcher, client):
        dispatcher.dispatch(DispatchRequest(images=IMAGES, profile="interview"), "secret")

        kwargs = client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == TEXT_MODE_MODEL
        (content,) = kwargs["contents"]
        assert content.role == "user"
        parts = content.parts
        assert len(parts) == 4
        assert [p.inline_data.data for p in parts[:3]] == [b"jpeg-0", b"jpeg-1", b"jpeg-2"]
        assert all(p.inline_data.mime_type == "image/jpeg" for p in parts[:3])
        assert parts[3].text == build_user_prompt(3)
        assert "3 screenshot(s)" in parts[3].text

    def test_system_prompt_has_search_disabled(self, dispatcher, client, profile_service):
        request = DispatchRequest(images=IMAGES[:1], profile="meeting", custom_prompt="Acme deal")
        dispatcher.dispatch(request, "secret")

        profile_service.build_system_prompt.assert_called_once_with(
            "meeting", "Acme deal", google_search_enabled=False
        )
        config = client.models.generate_content.call_args.kwargs["config"]
        assert config.system_instruction == "SYSTEM PROMPT"

    def test_model_override(self, dispatcher, client):
        dispatcher.dispatch(DispatchRequest(images=IMAGES, profile="interview"), "secret",
                            model="gemini-2.0-flash")
        assert client.models.generate_content.call_args.kwargs["model"] == "gemini-2.0-flash"

    def test_override_query_does_not_change_instruction(self, dispatcher, client):
        request = DispatchRequest(images=IMAGES, profile="interview", override_query="What about pricing?")
        dispatcher.dispatch(request, "secret")

        parts = client.models.generate_content.call_args.kwargs["contents"][0].parts
        assert parts[-1].text == build_user_prompt(3)


# ---------------------------------------------------------------------------
# Responses and errors
# ---------------------------------------------------------------------------

class TestResponses:
    def test_empty_response(self, dispatcher, client):
        client.models.generate_content.return_value = response_with_text(None)

        result = dispatcher.dispatch(DispatchRequest(images=IMAGES, profile="interview"), "secret")

        assert result.error.code == ErrorCode.EMPTY_RESPONSE
        assert result.error.message == "No response text received from Gemini"

    def test_text_from_first_candidate_part(self):
        response = SimpleNamespace(
            text=None,
            candidates=[SimpleNamespace(content=SimpleNamespace(parts=[SimpleNamespace(text="from parts")]))]
        )
        assert extract_response_text(response) == "from parts"

    def test_candidate_without_parts(self):
        response = SimpleNamespace(text="", candidates=[SimpleNamespace(content=SimpleNamespace(parts=[]))])
        assert extract_response_text(response) == ""

    def test_sdk_error_is_classified(self, dispatcher, client):
        client.models.generate_content.side_effect = RuntimeError("429 RESOURCE_EXHAUSTED")

        result = dispatcher.dispatch(DispatchRequest(images=IMAGES, profile="interview"), "secret")

        assert result.error.code == ErrorCode.RATE_LIMITED

    def test_client_creation_error_is_classified(self, profile_service, logger):
        factory = MagicMock(side_effect=ValueError("Missing key inputs argument! api_key"))
        dispatcher = GeminiQueryDispatcher(profile_service, logger, client_factory=factory)

        result = dispatcher.dispatch(DispatchRequest(images=IMAGES, profile="interview"), "secret")

        assert result.error.code == ErrorCode.INVALID_CREDENTIAL


class TestClassifyError:
    @pytest.mark.parametrize("message, code, category, text", [
        ("400 API key not valid. Please pass a valid API key.", ErrorCode.INVALID_CREDENTIAL,
         ErrorCategory.CONFIGURATION, "Invalid API key"),
        ("429 Quota exceeded for metric", ErrorCode.RATE_LIMITED,
         ErrorCategory.TRANSIENT, "API rate limit exceeded. Please wait and try again."),
        ("Too Many Requests", ErrorCode.RATE_LIMITED,
         ErrorCategory.TRANSIENT, "API rate limit exceeded. Please wait and try again."),
        ("404 models/gemini-9 is not found", ErrorCode.MODEL_UNAVAILABLE,
         ErrorCategory.UPSTREAM, "Model unavailable: 404 models/gemini-9 is not found"),
        ("connection reset by peer", ErrorCode.UPSTREAM_FAILURE,
         ErrorCategory.UPSTREAM, "connection reset by peer"),
    ])
    def test_mapping(self, message, code, category, text):
        error = classify_error(RuntimeError(message)).error
        assert error.code == code
        assert error.category is category
        assert error.message == text

    def test_generate_is_not_a_rate_limit(self):
        error = classify_error(RuntimeError("failed to generate content")).error
        assert error.code == ErrorCode.UPSTREAM_FAILURE
