"""
Model provider abstraction for post generation.

Supports two hosted LLM backends:
- Claude (Anthropic) - default
- Azure OpenAI chat completions

Usage:
    provider = get_provider("azure:gpt-4o-posts")
    result = provider.generate(system_prompt, user_prompt, config)
"""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

import anthropic
import httpx

from postfeed.errors import ModelProviderError

logger = logging.getLogger("postfeed")

DEFAULT_CLAUDE_MODEL = "claude-sonnet-4-5-20250929"
AZURE_API_VERSION = "2024-02-15-preview"


@dataclass
class ModelInfo:
    """Model identification information."""
    provider: str  # "anthropic", "azure"
    model_name: str  # Claude model name or Azure deployment name
    full_spec: str  # e.g., "claude-sonnet-4-5-20250929", "azure:posts-gpt4o"


@dataclass
class GenerationResult:
    """Result from text generation."""
    text: str
    usage: Optional[Dict[str, int]]
    provider: str
    model: str


def parse_model_spec(model_spec: Optional[str]) -> ModelInfo:
    """
    Parse model specification string into provider and model name.

    Formats:
    - "azure:posts-gpt4o" -> provider="azure", model="posts-gpt4o"
    - "claude-sonnet-4-5-20250929" -> provider="anthropic"
    - None -> MODEL_PROVIDER env ("anthropic" default). For azure the
      deployment comes from AZURE_OPENAI_DEPLOYMENT, for anthropic the model
      from CLAUDE_MODEL.

    Args:
        model_spec: Model specification string or None for default

    Returns:
        ModelInfo with provider and model name
    """
    if model_spec is None:
        provider = os.getenv("MODEL_PROVIDER", "anthropic").lower()
        if provider == "azure":
            deployment = os.getenv("AZURE_OPENAI_DEPLOYMENT", "")
            return ModelInfo(provider="azure", model_name=deployment, full_spec=f"azure:{deployment}")
        default_model = os.getenv("CLAUDE_MODEL", DEFAULT_CLAUDE_MODEL)
        return ModelInfo(provider="anthropic", model_name=default_model, full_spec=default_model)

    if model_spec.startswith("azure:"):
        deployment = model_spec.split(":", 1)[1]
        return ModelInfo(provider="azure", model_name=deployment, full_spec=model_spec)

    return ModelInfo(provider="anthropic", model_name=model_spec, full_spec=model_spec)


class ModelProvider(ABC):
    """Abstract base class for model providers."""

    @abstractmethod
    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        config: Dict[str, Any]
    ) -> GenerationResult:
        """
        Generate text using the model.

        Args:
            system_prompt: System prompt text
            user_prompt: User prompt text
            config: Configuration dict with credentials, max_tokens, temperature

        Returns:
            GenerationResult with generated text and metadata
        """
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return provider name for metadata."""
        pass


class ClaudeProvider(ModelProvider):
    """Claude (Anthropic) model provider."""

    def __init__(self, model_name: str):
        self.model_name = model_name

    @property
    def provider_name(self) -> str:
        return "anthropic"

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        config: Dict[str, Any]
    ) -> GenerationResult:
        """Generate using Claude Messages API."""
        logger.info(f"[ClaudeProvider] Generating with {self.model_name}")
        client = anthropic.Anthropic(api_key=config["anthropic_api_key"])

        try:
            message = client.messages.create(
                model=self.model_name,
                max_tokens=int(config.get("max_tokens", 500)),
                temperature=float(config.get("temperature", 0.7)),
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}]
            )
        except anthropic.APIStatusError as e:
            logger.error(f"[ClaudeProvider] Generation failed: {e}")
            raise ModelProviderError("Anthropic", str(e), status_code=e.status_code) from e
        except anthropic.APIError as e:
            logger.error(f"[ClaudeProvider] Generation failed: {e}")
            raise ModelProviderError("Anthropic", str(e)) from e

        text = message.content[0].text.strip() if message.content else ""

        usage = None
        if getattr(message, "usage", None):
            try:
                usage = {
                    "input_tokens": message.usage.input_tokens,
                    "output_tokens": message.usage.output_tokens,
                    "total_tokens": message.usage.input_tokens + message.usage.output_tokens
                }
            except (AttributeError, TypeError) as e:
                logger.warning(f"[ClaudeProvider] Usage extraction failed: {e}")

        logger.info(f"[ClaudeProvider] Generated {len(text)} chars")

        return GenerationResult(
            text=text,
            usage=usage,
            provider=self.provider_name,
            model=self.model_name
        )


class AzureOpenAIProvider(ModelProvider):
    """Azure OpenAI chat completions provider."""

    def __init__(self, deployment: str, client: Optional[httpx.Client] = None):
        self.model_name = deployment
        self._client = client

    @property
    def provider_name(self) -> str:
        return "azure"

    def _url(self, endpoint: str) -> str:
        return (
            f"{endpoint.rstrip('/')}/openai/deployments/{self.model_name}"
            f"/chat/completions?api-version={AZURE_API_VERSION}"
        )

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        config: Dict[str, Any]
    ) -> GenerationResult:
        """Generate using Azure OpenAI chat completions."""
        logger.info(f"[AzureOpenAIProvider] Generating with deployment {self.model_name}")

        body = {
            "temperature": float(config.get("temperature", 0.7)),
            "max_tokens": int(config.get("max_tokens", 500)),
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }
        headers = {"api-key": config["azure_key"], "Content-Type": "application/json"}
        timeout = float(config.get("timeout", 60))

        client = self._client or httpx.Client(timeout=timeout)
        try:
            response = client.post(self._url(config["azure_endpoint"]), json=body, headers=headers)
        except httpx.RequestError as e:
            logger.error(f"[AzureOpenAIProvider] Connection error: {e}")
            raise ModelProviderError("Azure OpenAI", f"connection failed: {e}") from e
        finally:
            if self._client is None:
                client.close()

        if response.status_code >= 400:
            logger.error(f"[AzureOpenAIProvider] HTTP {response.status_code}")
            raise ModelProviderError("Azure OpenAI", response.text, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"[AzureOpenAIProvider] Non-JSON response (HTTP {response.status_code})")
            raise ModelProviderError(
                "Azure OpenAI", "invalid JSON response", status_code=response.status_code
            ) from e
        if not isinstance(data, dict):
            raise ModelProviderError(
                "Azure OpenAI", "unexpected response shape", status_code=response.status_code
            )

        try:
            text = (data["choices"][0]["message"]["content"] or "").strip()
        except (KeyError, IndexError, TypeError):
            text = ""

        usage = None
        if data.get("usage"):
            usage = {
                "input_tokens": data["usage"].get("prompt_tokens", 0),
                "output_tokens": data["usage"].get("completion_tokens", 0),
                "total_tokens": data["usage"].get("total_tokens", 0),
            }

        logger.info(f"[AzureOpenAIProvider] Generated {len(text)} chars")

        return GenerationResult(
            text=text,
            usage=usage,
            provider=self.provider_name,
            model=self.model_name
        )


def get_provider(model_spec: Optional[str] = None) -> ModelProvider:
    """
    Get appropriate model provider for the given model specification.

    Args:
        model_spec: "azure:<deployment>", a Claude model name, or None for
                    the configured default

    Returns:
        ModelProvider instance
    """
    info = parse_model_spec(model_spec)

    if info.provider == "azure":
        return AzureOpenAIProvider(info.model_name)
    return ClaudeProvider(info.model_name)
