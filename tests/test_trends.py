"""
Tests for trends module.
"""

import httpx
import pytest

from postfeed.errors import TrendFetchError
from postfeed.generator.trends import FALLBACK_TRENDS, MAX_TRENDS, fetch_trends


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestFetchTrends:
    """Tests for fetch_trends."""

    def test_no_key_uses_fallback(self):
        trends = fetch_trends(api_key=None)
        assert trends == FALLBACK_TRENDS
        assert trends is not FALLBACK_TRENDS

    def test_bing_results_parsed(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["key"] = request.headers.get("Ocp-Apim-Subscription-Key")
            seen["freshness"] = request.url.params.get("freshness")
            items = [
                {"name": f"Story {i}", "description": f"  spaced \n  snippet {i} ", "url": f"https://n/{i}"}
                for i in range(10)
            ]
            return httpx.Response(200, json={"value": items})

        trends = fetch_trends(api_key="bing-key", client=_client(handler))

        assert seen == {"key": "bing-key", "freshness": "Day"}
        assert len(trends) == MAX_TRENDS
        assert trends[0].title == "Story 0"
        assert trends[0].snippet == "spaced snippet 0"
        assert trends[0].url == "https://n/0"

    def test_missing_value_returns_empty(self):
        trends = fetch_trends(
            api_key="bing-key",
            client=_client(lambda request: httpx.Response(200, json={})),
        )
        assert trends == []

    def test_http_error_raises(self):
        client = _client(lambda request: httpx.Response(401, json={"error": "denied"}))

        with pytest.raises(TrendFetchError) as exc_info:
            fetch_trends(api_key="bad-key", client=client)

        assert "401" in str(exc_info.value)

    def test_connection_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(TrendFetchError):
            fetch_trends(api_key="bing-key", client=_client(handler))
