"""Completion client for the OpenAI text-davinci endpoint."""

import time
import uuid
from pathlib import Path

import requests

from .config import ClientConfig, load_config
from .errors import (
    ApiStatusError,
    AuthenticationError,
    MalformedResponseError,
    TransportError,
)
from .logger import get_logger
from .prompt import build_prompt
from .response import ApiErrorBody, CompletionRequest, CompletionResponse

logger = get_logger(__name__)

COMPLETIONS_URL = "https://api.openai.com/v1/completions"


class CompletionClient:
    """Sends one prompt per call and returns the generated text."""

    def __init__(self, config: ClientConfig | None = None):
        """Initialize client with configuration.

        Args:
            config: Sampling and timeout settings; defaults when omitted
        """
        self.config = config or ClientConfig()

    @classmethod
    def from_config(cls, config_path: str | Path) -> "CompletionClient":
        """Load client from YAML config file.

        Raises:
            FileNotFoundError: If config file not found
            ValueError: If configuration is invalid
        """
        return cls(load_config(config_path))

    def build_request(self, context: str, question: str, max_tokens: int) -> CompletionRequest:
        """Build the request body for a context/question pair."""
        sampling = self.config.sampling
        return CompletionRequest(
            model=sampling.model,
            prompt=build_prompt(context, question),
            max_tokens=max_tokens,
            temperature=sampling.temperature,
            top_p=sampling.top_p,
            frequency_penalty=sampling.frequency_penalty,
            presence_penalty=sampling.presence_penalty,
            stop=sampling.stop,
        )

    def complete(
        self,
        api_key: str,
        context: str,
        question: str,
        max_tokens: int,
        *,
        timeout_s: float | None = None,
    ) -> str:
        """Ask the model a question and return the first completion's text.

        Args:
            api_key: OpenAI API key, sent as a bearer credential
            context: How the model should behave
            question: The question or phrase to ask
            max_tokens: Maximum tokens to generate, passed through unchanged
            timeout_s: Override the configured request timeout

        Returns:
            ``choices[0].text`` exactly as returned, whitespace included

        Raises:
            TransportError: If no HTTP response was received
            AuthenticationError: If the credential was rejected
            ApiStatusError: For any other non-2xx status
            MalformedResponseError: If the body has the wrong shape
            EmptyChoicesError: If the response has no choices
        """
        return self.create(
            api_key, context, question, max_tokens, timeout_s=timeout_s
        ).first_text()

    def create(
        self,
        api_key: str,
        context: str,
        question: str,
        max_tokens: int,
        *,
        timeout_s: float | None = None,
    ) -> CompletionResponse:
        """Same as :meth:`complete` but returns the whole parsed response.

        Raises:
            ValueError: If ``timeout_s`` is not a positive number
            EmptyChoicesError: If the response has no choices
        """
        timeout = timeout_s if timeout_s is not None else self.config.timeout_s
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ValueError(f"timeout_s must be a positive number, got {timeout!r}")

        request = self.build_request(context, question, max_tokens)
        request_id = str(uuid.uuid4())

        logger.info(
            "completion.start",
            event="completion.start",
            request_id=request_id,
            model=request.model,
            max_tokens=request.max_tokens,
            prompt_chars=len(request.prompt),
        )

        start_time = time.time()
        try:
            result = self._send(api_key, request, timeout)
            result.first_text()  # empty choices fail inside the error branch
        except Exception as e:
            elapsed_ms = int((time.time() - start_time) * 1000)
            logger.error(
                "completion.error",
                event="completion.error",
                request_id=request_id,
                error_type=type(e).__name__,
                error_message=str(e),
                status_code=getattr(e, "status_code", None),
                elapsed_ms=elapsed_ms,
            )
            raise

        elapsed_ms = int((time.time() - start_time) * 1000)
        logger.info(
            "completion.success",
            event="completion.success",
            request_id=request_id,
            completion_id=result.id,
            model=result.model,
            choices=len(result.choices),
            finish_reason=result.choices[0].finish_reason if result.choices else None,
            usage={
                "prompt_tokens": result.usage.prompt_tokens,
                "completion_tokens": result.usage.completion_tokens,
                "total_tokens": result.usage.total_tokens,
            } if result.usage else None,
            elapsed_ms=elapsed_ms,
        )
        return result

    def _send(self, api_key: str, request: CompletionRequest, timeout: float) -> CompletionResponse:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }

        try:
            response = requests.post(
                COMPLETIONS_URL,
                headers=headers,
                json=request.to_payload(),
                timeout=timeout,
            )
        except requests.Timeout as e:
            raise TransportError(f"Request timed out (timeout: {timeout}s)") from e
        except requests.ConnectionError as e:
            raise TransportError(
                f"Request to {COMPLETIONS_URL} failed: {_redact(str(e), api_key)}"
            ) from e
        except requests.RequestException as e:
            # InvalidHeader and friends echo the Authorization value
            raise TransportError(
                f"Request to {COMPLETIONS_URL} could not be sent ({type(e).__name__})"
            ) from e
        except UnicodeError as e:
            raise TransportError(
                f"Request to {COMPLETIONS_URL} could not be encoded ({type(e).__name__})"
            ) from e

        if not 200 <= response.status_code < 300:
            raise _status_error(response)

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Response body is not valid JSON: {e}", body=response.text
            ) from e

        return CompletionResponse.from_dict(data)


def _redact(text: str, api_key: str) -> str:
    if api_key and api_key.strip():
        text = text.replace(api_key, "***").replace(api_key.strip(), "***")
    return text


def _status_error(response) -> ApiStatusError:
    """Build the exception for a non-2xx response."""
    status = response.status_code
    body = response.text
    try:
        error = ApiErrorBody.from_dict(response.json())
    except ValueError:
        error = None

    detail = error.message if error else (body[:200] if body else "no body")
    if status in (401, 403):
        return AuthenticationError(
            f"Authentication failed (HTTP {status}): {detail}",
            status_code=status,
            body=body,
            error=error,
        )
    return ApiStatusError(
        f"Completion request failed (HTTP {status}): {detail}",
        status_code=status,
        body=body,
        error=error,
    )


def complete(
    api_key: str,
    context: str,
    question: str,
    max_tokens: int,
    *,
    timeout_s: float | None = None,
) -> str:
    """Ask text-davinci-003 a question using the default configuration."""
    return CompletionClient().complete(
        api_key, context, question, max_tokens, timeout_s=timeout_s
    )
