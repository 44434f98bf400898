"""
LLM provider abstraction and response parsing utilities.

Provides a provider-agnostic interface for single-turn generative-language calls
and utilities for pulling structured JSON out of free-form replies.

Calls are made exactly once: failures surface as UpstreamError and are never
retried here. Callers decide what a failure means for their request.
"""

import json
import os
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()

GENERATION_CONFIG_PATH = Path(__file__).parent / "generation.yaml"

# Matches a ```json fenced block and captures its body
_FENCED_JSON = re.compile(r"```json\s*(.*?)\s*```", re.DOTALL)


# --- Exceptions ---


class LLMError(Exception):
    """Base class for generative-language failures."""


class MissingCredentialError(LLMError, ValueError):
    """Raised when the API key for the selected provider is not configured."""

    def __init__(self, env_var: str):
        self.env_var = env_var
        self.message = f"{env_var} environment variable not set"
        super().__init__(self.message)


class UpstreamError(LLMError):
    """
    Raised when the provider API call fails (non-2xx, transport error, empty reply).

    Attributes:
        message: Error description surfaced to the caller
        provider: Provider name (e.g., "gemini/gemini-1.5-flash")
        original_error: The SDK exception, if any
    """

    def __init__(self, message: str, provider: str = None, original_error: Exception = None):
        self.message = message
        self.provider = provider
        self.original_error = original_error

        parts = [message]
        if provider:
            parts.append(f"Provider: {provider}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


# --- Generation settings ---


@dataclass
class GenerationSettings:
    """Sampling settings for a single generate() call."""

    temperature: float = 0.7
    top_k: int = 40
    top_p: float = 0.95
    max_output_tokens: int = 2048


def load_generation_settings(
    operation: str, config_path: Path = None
) -> GenerationSettings:
    """
    Load sampling settings for a named operation from generation.yaml.

    Args:
        operation: Operation key (e.g., "analyze", "extract_text", "assist")
        config_path: Optional override for the YAML file

    Returns:
        GenerationSettings for the operation

    Raises:
        ValueError: If the operation is not defined in the config
    """
    if config_path is None:
        config_path = GENERATION_CONFIG_PATH

    config = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    if operation not in config:
        available = list(config.keys())
        raise ValueError(f"Generation settings '{operation}' not found. Available: {available}")

    return GenerationSettings(**config[operation])


# --- LLM Provider Classes ---


@dataclass
class LLMResponse:
    """Response from an LLM provider."""

    content: str
    model: str
    input_tokens: int
    output_tokens: int


class LLMProvider(ABC):
    """
    Abstract base for LLM providers.

    Subclasses must:
    - Set _provider_prefix class attribute (e.g., "gemini", "openai")
    - Set self._api_exception to the SDK's base API exception type
    - Implement _call_api() for the actual API call
    - Call update_model(model) in __init__ to set model and name
    """

    _provider_prefix: str
    _api_exception: type[Exception]

    name: str
    model: str

    def update_model(self, model: str):
        """Update the model and refresh the provider name."""
        self.model = model
        self.name = f"{self._provider_prefix}/{model}"

    @abstractmethod
    def _call_api(
        self, user_prompt: str, settings: GenerationSettings, system_prompt: Optional[str]
    ) -> LLMResponse:
        """Make a single API call. Implemented by subclasses."""
        pass

    def generate(
        self,
        user_prompt: str,
        settings: GenerationSettings = None,
        system_prompt: Optional[str] = None,
    ) -> LLMResponse:
        """
        Generate a response for a single-turn prompt.

        Raises:
            UpstreamError: If the API rejects the request or returns no text
        """
        if settings is None:
            settings = GenerationSettings()

        try:
            response = self._call_api(user_prompt, settings, system_prompt)
        except self._api_exception as e:
            raise UpstreamError(f"{self._provider_prefix} API error: {e}", self.name, e) from e

        if not response.content:
            raise UpstreamError(f"{self._provider_prefix} API returned no text", self.name)

        return response


class GeminiProvider(LLMProvider):
    """Google Gemini provider (generateContent)."""

    _provider_prefix = "gemini"

    def __init__(self, model: str = "gemini-1.5-flash"):
        # Lazy import - only load the SDK if this provider is used
        try:
            from google import genai
            from google.genai import errors, types
        except ImportError:
            raise ImportError("google-genai package required. Install with: pip install google-genai")

        api_key = os.getenv("GEMINI_API_KEY")
        if not api_key:
            raise MissingCredentialError("GEMINI_API_KEY")

        self.client = genai.Client(api_key=api_key)
        self._types = types
        self._api_exception = errors.APIError
        self.update_model(model)

    def _call_api(
        self, user_prompt: str, settings: GenerationSettings, system_prompt: Optional[str]
    ) -> LLMResponse:
        response = self.client.models.generate_content(
            model=self.model,
            contents=user_prompt,
            config=self._types.GenerateContentConfig(
                system_instruction=system_prompt,
                temperature=settings.temperature,
                top_k=settings.top_k,
                top_p=settings.top_p,
                max_output_tokens=settings.max_output_tokens,
            ),
        )
        usage = response.usage_metadata
        return LLMResponse(
            content=response.text or "",
            model=self.model,
            input_tokens=(usage.prompt_token_count or 0) if usage else 0,
            output_tokens=(usage.candidates_token_count or 0) if usage else 0,
        )


class OpenAIProvider(LLMProvider):
    """OpenAI GPT provider."""

    _provider_prefix = "openai"

    def __init__(self, model: str = "gpt-4o-mini"):
        # Lazy import - openai SDK is heavy, only load if this provider is used
        try:
            import openai
        except ImportError:
            raise ImportError("openai package required. Install with: pip install openai")

        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise MissingCredentialError("OPENAI_API_KEY")

        self.client = openai.OpenAI(api_key=api_key)
        self._api_exception = openai.OpenAIError
        self.update_model(model)

    def _call_api(
        self, user_prompt: str, settings: GenerationSettings, system_prompt: Optional[str]
    ) -> LLMResponse:
        messages = [{"role": "user", "content": user_prompt}]
        if system_prompt:
            messages.insert(0, {"role": "system", "content": system_prompt})

        response = self.client.chat.completions.create(
            model=self.model,
            max_tokens=settings.max_output_tokens,
            temperature=settings.temperature,
            top_p=settings.top_p,
            messages=messages,
        )
        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=self.model,
            input_tokens=response.usage.prompt_tokens,
            output_tokens=response.usage.completion_tokens,
        )


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider."""

    _provider_prefix = "anthropic"

    def __init__(self, model: str = "claude-sonnet-4-20250514"):
        # Lazy import - anthropic SDK is heavy, only load if this provider is used
        try:
            import anthropic
        except ImportError:
            raise ImportError("anthropic package required. Install with: pip install anthropic")

        api_key = os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            raise MissingCredentialError("ANTHROPIC_API_KEY")

        self.client = anthropic.Anthropic(api_key=api_key)
        self._api_exception = anthropic.AnthropicError
        self.update_model(model)

    def _call_api(
        self, user_prompt: str, settings: GenerationSettings, system_prompt: Optional[str]
    ) -> LLMResponse:
        kwargs = {}
        if system_prompt:
            kwargs["system"] = system_prompt

        response = self.client.messages.create(
            model=self.model,
            max_tokens=settings.max_output_tokens,
            temperature=settings.temperature,
            top_k=settings.top_k,
            messages=[{"role": "user", "content": user_prompt}],
            **kwargs,
        )
        return LLMResponse(
            content=response.content[0].text,
            model=self.model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )


# --- Provider Factory ---

PROVIDERS = {
    "gemini": GeminiProvider,
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
}


def get_provider(provider_name: str = None, model: str = None) -> LLMProvider:
    """
    Get an LLM provider instance.

    Args:
        provider_name: "gemini", "openai" or "anthropic" (default: LLM_PROVIDER env var)
        model: Model name (default: LLM_MODEL env var, then provider-specific default)

    Returns:
        LLMProvider instance

    Raises:
        MissingCredentialError: If the provider's API key is not set
        ValueError: If the provider name is unknown
    """
    if provider_name is None:
        provider_name = os.getenv("LLM_PROVIDER", "gemini").lower()
    if model is None:
        model = os.getenv("LLM_MODEL")

    if provider_name not in PROVIDERS:
        raise ValueError(
            f"Unknown provider: {provider_name}. Use one of: {', '.join(PROVIDERS)}"
        )

    provider_class = PROVIDERS[provider_name]
    return provider_class(model=model) if model else provider_class()


# --- Response Parsing Utilities ---


def extract_json_object(text: str) -> str:
    """
    Pull the JSON object candidate out of an LLM reply.

    Single extraction attempt, in order: the body of a ```json fenced block,
    the outermost {...} span, or the stripped text itself. The result is not
    validated; callers json.loads() it.
    """
    fenced = _FENCED_JSON.search(text)
    if fenced:
        return fenced.group(1).strip()

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        return text[start : end + 1]

    return text.strip()


def strip_code_fences(text: str) -> str:
    """Unwrap any ``` fenced blocks, keeping their contents, and trim whitespace."""
    text = re.sub(r"```(?:\w+)?\n?(.*?)```", r"\1", text, flags=re.DOTALL)
    return text.strip()


def parse_array_response(text: str, limit: int = None) -> list[str]:
    """
    Parse JSON array from LLM response with fallback parsing.

    Args:
        text: LLM response text
        limit: Maximum number of items to keep from the line-split fallback
               (None keeps everything)

    Returns:
        List of strings
    """
    text = text.strip()

    # Try direct JSON parse
    try:
        result = json.loads(text)
        if isinstance(result, list):
            return [str(item) for item in result]
    except json.JSONDecodeError:
        pass

    # Try to find JSON array in the text
    start = text.find("[")
    end = text.rfind("]")
    if start != -1 and end != -1 and end > start:
        try:
            result = json.loads(text[start : end + 1])
            if isinstance(result, list):
                return [str(item) for item in result]
        except json.JSONDecodeError:
            pass

    # Fallback: split by newlines and clean
    lines = []
    for line in text.split("\n"):
        line = line.strip().lstrip("-•*").strip().strip('"').strip(",")
        line = re.sub(r"^\d+[.)]\s*", "", line)
        if line and not line.startswith("[") and not line.startswith("]") and not line.startswith("```"):
            lines.append(line)

    return lines[:limit] if limit is not None else lines
