#!/usr/bin/env python3
"""Tests for the advisory client."""
import json
import logging
from datetime import datetime
from pathlib import Path

import httpx
import pytest
from pydantic import ValidationError

from motocare import AdvisoryClient, FALLBACK_ADVICE, build_prompt, new_state, update_odometer
from motocare.advisory import EMPTY_ADVICE
from motocare.config import Settings

CREATED = datetime(2025, 1, 10)
NOW = datetime(2025, 8, 15)

SETTINGS = Settings(
    advisory_url="http://advisor.test",
    advisory_model="mechanic-1",
    advisory_timeout=1.0,
)


@pytest.fixture
def state():
    return update_odometer(new_state(CREATED, "Click 125i"), 4000)


def client_for(handler):
    return AdvisoryClient(SETTINGS, transport=httpx.MockTransport(handler))


class TestBuildPrompt:
    """Tests for build_prompt."""

    def test_mentions_odometer(self, state):
        assert "current odometer is 4,000 km" in build_prompt(state, NOW)

    def test_one_line_per_item(self, state):
        prompt = build_prompt(state, NOW)
        item_lines = [line for line in prompt.splitlines() if line.startswith("- ")]
        assert len(item_lines) == len(state.maintenance_items)

    def test_includes_health(self, state):
        prompt = build_prompt(state, NOW)
        assert "- Engine Oil: Last serviced at 0 km" in prompt
        assert "Critical, 0% remaining" in prompt

    def test_word_limit_instruction(self, state):
        assert "under 150 words" in build_prompt(state, NOW)


class TestSummarize:
    """Tests for AdvisoryClient.summarize."""

    def test_returns_generated_text(self, state):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"response": "  Change your oil now.  "})

        assert client_for(handler).summarize(state, NOW) == "Change your oil now."
        assert requests[0].url == "http://advisor.test/api/generate"
        body = json.loads(requests[0].content)
        assert body["model"] == "mechanic-1"
        assert body["stream"] is False
        assert "Engine Oil" in body["prompt"]

    def test_empty_text_uses_default(self, state):
        handler = lambda request: httpx.Response(200, json={"response": ""})
        assert client_for(handler).summarize(state, NOW) == EMPTY_ADVICE

    def test_http_error_falls_back(self, state, caplog):
        handler = lambda request: httpx.Response(500, text="boom")
        with caplog.at_level(logging.WARNING):
            assert client_for(handler).summarize(state, NOW) == FALLBACK_ADVICE
        assert "Advisory service request failed" in caplog.text

    def test_connection_error_falls_back(self, state):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        assert client_for(handler).summarize(state, NOW) == FALLBACK_ADVICE

    def test_timeout_falls_back(self, state, caplog):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with caplog.at_level(logging.WARNING):
            assert client_for(handler).summarize(state, NOW) == FALLBACK_ADVICE
        assert "timed out" in caplog.text

    def test_invalid_json_falls_back(self, state):
        handler = lambda request: httpx.Response(200, text="<html>")
        assert client_for(handler).summarize(state, NOW) == FALLBACK_ADVICE

    def test_unexpected_shape_falls_back(self, state):
        handler = lambda request: httpx.Response(200, json=["not", "an", "object"])
        assert client_for(handler).summarize(state, NOW) == FALLBACK_ADVICE

    def test_malformed_url_falls_back(self, state, caplog):
        client = AdvisoryClient(Settings(advisory_url="http://[::1"))
        with caplog.at_level(logging.WARNING):
            assert client.summarize(state, NOW) == FALLBACK_ADVICE
        assert "misconfigured" in caplog.text


class TestSettings:
    """Tests for environment-driven settings."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in (
            "MOTOCARE_DATA_DIR",
            "MOTOCARE_ADVISORY_URL",
            "MOTOCARE_ADVISORY_MODEL",
            "MOTOCARE_ADVISORY_TIMEOUT",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        settings = Settings()
        assert settings.data_dir == Path("garage")
        assert settings.advisory_url == "http://localhost:11434"
        assert settings.advisory_model == "llama3.2"
        assert settings.advisory_timeout == 20.0

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("MOTOCARE_DATA_DIR", "/srv/moto")
        monkeypatch.setenv("MOTOCARE_ADVISORY_URL", "http://gpu:11434")
        monkeypatch.setenv("MOTOCARE_ADVISORY_MODEL", "qwen2.5:3b")
        monkeypatch.setenv("MOTOCARE_ADVISORY_TIMEOUT", "5")
        settings = Settings()
        assert settings.data_dir == Path("/srv/moto")
        assert settings.advisory_url == "http://gpu:11434"
        assert settings.advisory_model == "qwen2.5:3b"
        assert settings.advisory_timeout == 5.0

    def test_invalid_timeout_rejected(self, monkeypatch):
        monkeypatch.setenv("MOTOCARE_ADVISORY_TIMEOUT", "soon")
        with pytest.raises(ValidationError):
            Settings()

    def test_explicit_values_win(self, monkeypatch):
        monkeypatch.setenv("MOTOCARE_ADVISORY_MODEL", "from-env")
        assert Settings(advisory_model="explicit").advisory_model == "explicit"
