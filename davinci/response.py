"""Completion request and response data structures."""

from dataclasses import asdict, dataclass, field
from typing import Any

from .errors import EmptyChoicesError, MalformedResponseError


@dataclass(frozen=True)
class CompletionRequest:
    """Body of a POST to the completions endpoint."""

    model: str
    prompt: str
    max_tokens: int
    temperature: float = 0.9
    top_p: int = 1
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.6
    stop: tuple[str, ...] = ("\n",)

    def to_payload(self) -> dict[str, Any]:
        """Render the JSON body sent to the provider."""
        payload = asdict(self)
        payload["stop"] = list(self.stop)
        return payload


@dataclass
class CompletionChoice:
    """One generated continuation."""

    text: str
    index: int
    logprobs: Any = None
    finish_reason: str | None = None


@dataclass
class UsageStats:
    """Token accounting reported by the provider."""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass
class CompletionResponse:
    """Parsed completion response."""

    id: str
    object: str
    created: int
    model: str
    choices: list[CompletionChoice] = field(default_factory=list)
    usage: UsageStats | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "CompletionResponse":
        """Parse a decoded JSON body.

        Args:
            data: Decoded response body

        Returns:
            Parsed response

        Raises:
            MalformedResponseError: If a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Expected a JSON object, got {type(data).__name__}", body=data
            )

        raw_choices = _require(data, "choices", list, data)
        choices = []
        for position, raw in enumerate(raw_choices):
            if not isinstance(raw, dict):
                raise MalformedResponseError(
                    f"choices[{position}] is not an object", body=data
                )
            finish_reason = raw.get("finish_reason")
            if finish_reason is not None and not isinstance(finish_reason, str):
                raise MalformedResponseError(
                    f"choices[{position}].finish_reason must be a string", body=data
                )
            choices.append(
                CompletionChoice(
                    text=_require(raw, "text", str, data, f"choices[{position}]."),
                    index=_require(raw, "index", int, data, f"choices[{position}]."),
                    logprobs=raw.get("logprobs"),
                    finish_reason=finish_reason,
                )
            )

        raw_usage = _require(data, "usage", dict, data)
        usage = UsageStats(
            prompt_tokens=_require(raw_usage, "prompt_tokens", int, data, "usage."),
            completion_tokens=_require(raw_usage, "completion_tokens", int, data, "usage."),
            total_tokens=_require(raw_usage, "total_tokens", int, data, "usage."),
        )

        return cls(
            id=_require(data, "id", str, data),
            object=_require(data, "object", str, data),
            created=_require(data, "created", int, data),
            model=_require(data, "model", str, data),
            choices=choices,
            usage=usage,
        )

    def first_text(self) -> str:
        """Return the first choice's text exactly as the provider sent it.

        Raises:
            EmptyChoicesError: If the response has no choices
        """
        if not self.choices:
            raise EmptyChoicesError(
                f"Completion {self.id or '<no id>'} returned no choices"
            )
        return self.choices[0].text


@dataclass
class ApiErrorBody:
    """Error payload returned with non-2xx responses."""

    message: str
    type: str | None = None
    param: str | None = None
    code: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "ApiErrorBody | None":
        """Parse ``{"error": {...}}``; return None for any other shape."""
        if not isinstance(data, dict) or not isinstance(data.get("error"), dict):
            return None
        err = data["error"]
        message = err.get("message")
        if not isinstance(message, str):
            return None

        def _opt(key):
            value = err.get(key)
            return value if isinstance(value, str) else None

        return cls(message=message, type=_opt("type"), param=_opt("param"), code=_opt("code"))


def _require(obj: dict, key: str, expected: type, body: Any, prefix: str = "") -> Any:
    """Fetch a required field and check its type."""
    if key not in obj:
        raise MalformedResponseError(f"Missing field '{prefix}{key}'", body=body)
    value = obj[key]
    # bool is an int subclass; reject it for integer fields
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise MalformedResponseError(
            f"Field '{prefix}{key}' must be {expected.__name__}, "
            f"got {type(value).__name__}",
            body=body,
        )
    return value
