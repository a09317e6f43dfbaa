"""
Tests for model_provider module.
"""

import json
import os
from unittest.mock import Mock, patch

import anthropic
import httpx
import pytest

from postfeed.errors import ModelProviderError
from postfeed.generator.model_provider import (
    AZURE_API_VERSION,
    AzureOpenAIProvider,
    ClaudeProvider,
    get_provider,
    parse_model_spec,
)


CLAUDE_CONFIG = {
    "anthropic_api_key": "test-key",
    "max_tokens": 500,
    "temperature": 0.7,
}

AZURE_CONFIG = {
    "azure_endpoint": "https://example.openai.azure.com/",
    "azure_key": "azure-key",
    "max_tokens": 500,
    "temperature": 0.7,
}


class TestParseModelSpec:
    """Tests for parse_model_spec."""

    def test_azure_spec(self):
        info = parse_model_spec("azure:posts-gpt4o")
        assert info.provider == "azure"
        assert info.model_name == "posts-gpt4o"
        assert info.full_spec == "azure:posts-gpt4o"

    def test_claude_spec(self):
        info = parse_model_spec("claude-test")
        assert info.provider == "anthropic"
        assert info.model_name == "claude-test"

    def test_default_anthropic(self):
        with patch.dict(os.environ, {"CLAUDE_MODEL": "claude-env"}, clear=False):
            os.environ.pop("MODEL_PROVIDER", None)
            info = parse_model_spec(None)
        assert info.provider == "anthropic"
        assert info.model_name == "claude-env"

    def test_default_azure_from_env(self):
        with patch.dict(os.environ, {"MODEL_PROVIDER": "azure", "AZURE_OPENAI_DEPLOYMENT": "dep"}):
            info = parse_model_spec(None)
        assert info.provider == "azure"
        assert info.model_name == "dep"

    def test_get_provider(self):
        assert isinstance(get_provider("azure:dep"), AzureOpenAIProvider)
        assert isinstance(get_provider("claude-test"), ClaudeProvider)


class TestClaudeProvider:
    """Tests for ClaudeProvider."""

    def test_successful_generation(self):
        mock_message = Mock()
        mock_message.content = [Mock(text="  Generated post text  ")]
        mock_message.usage = Mock(input_tokens=100, output_tokens=50)

        with patch("postfeed.generator.model_provider.anthropic.Anthropic") as mock_anthropic:
            mock_client = Mock()
            mock_client.messages.create.return_value = mock_message
            mock_anthropic.return_value = mock_client

            result = ClaudeProvider("claude-test").generate("System", "User", CLAUDE_CONFIG)

            mock_anthropic.assert_called_once_with(api_key="test-key")
            kwargs = mock_client.messages.create.call_args.kwargs
            assert kwargs["model"] == "claude-test"
            assert kwargs["system"] == "System"
            assert kwargs["messages"] == [{"role": "user", "content": "User"}]

        assert result.text == "Generated post text"
        assert result.usage == {"input_tokens": 100, "output_tokens": 50, "total_tokens": 150}
        assert result.provider == "anthropic"

    def test_generation_without_usage(self):
        mock_message = Mock()
        mock_message.content = [Mock(text="Text")]
        mock_message.usage = None

        with patch("postfeed.generator.model_provider.anthropic.Anthropic") as mock_anthropic:
            mock_anthropic.return_value.messages.create.return_value = mock_message
            result = ClaudeProvider("claude-test").generate("S", "U", CLAUDE_CONFIG)

        assert result.usage is None

    def test_api_error_wrapped(self):
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")

        with patch("postfeed.generator.model_provider.anthropic.Anthropic") as mock_anthropic:
            mock_anthropic.return_value.messages.create.side_effect = (
                anthropic.APIConnectionError(request=request)
            )
            with pytest.raises(ModelProviderError) as exc_info:
                ClaudeProvider("claude-test").generate("S", "U", CLAUDE_CONFIG)

        assert exc_info.value.provider == "Anthropic"


class TestAzureOpenAIProvider:
    """Tests for AzureOpenAIProvider."""

    def test_successful_generation(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["api_key"] = request.headers.get("api-key")
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json={
                "choices": [{"message": {"content": "  Azure post  "}}],
                "usage": {"prompt_tokens": 10, "completion_tokens": 20, "total_tokens": 30},
            })

        client = httpx.Client(transport=httpx.MockTransport(handler))
        result = AzureOpenAIProvider("posts", client=client).generate("Sys", "Usr", AZURE_CONFIG)

        assert captured["url"] == (
            "https://example.openai.azure.com/openai/deployments/posts/chat/completions"
            f"?api-version={AZURE_API_VERSION}"
        )
        assert captured["api_key"] == "azure-key"
        assert captured["body"]["messages"][0] == {"role": "system", "content": "Sys"}
        assert captured["body"]["max_tokens"] == 500
        assert result.text == "Azure post"
        assert result.usage == {"input_tokens": 10, "output_tokens": 20, "total_tokens": 30}
        assert result.provider == "azure"

    def test_empty_choices_give_empty_text(self):
        client = httpx.Client(transport=httpx.MockTransport(
            lambda request: httpx.Response(200, json={"choices": []})
        ))
        result = AzureOpenAIProvider("posts", client=client).generate("S", "U", AZURE_CONFIG)
        assert result.text == ""
        assert result.usage is None

    def test_http_error_raises(self):
        client = httpx.Client(transport=httpx.MockTransport(
            lambda request: httpx.Response(429, text="rate limited")
        ))

        with pytest.raises(ModelProviderError) as exc_info:
            AzureOpenAIProvider("posts", client=client).generate("S", "U", AZURE_CONFIG)

        assert exc_info.value.status_code == 429
        assert "rate limited" in str(exc_info.value)

    def test_connection_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("down", request=request)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        with pytest.raises(ModelProviderError):
            AzureOpenAIProvider("posts", client=client).generate("S", "U", AZURE_CONFIG)

    def test_non_json_body_raises(self):
        client = httpx.Client(transport=httpx.MockTransport(
            lambda request: httpx.Response(200, text="<html>gateway</html>")
        ))

        with pytest.raises(ModelProviderError) as exc_info:
            AzureOpenAIProvider("posts", client=client).generate("S", "U", AZURE_CONFIG)

        assert exc_info.value.status_code == 200
        assert "invalid JSON response" in str(exc_info.value)

    def test_non_object_json_raises(self):
        client = httpx.Client(transport=httpx.MockTransport(
            lambda request: httpx.Response(200, json=["unexpected"])
        ))

        with pytest.raises(ModelProviderError):
            AzureOpenAIProvider("posts", client=client).generate("S", "U", AZURE_CONFIG)
