"""
Maintenance advice from an external text-generation service.

The service is an Ollama-compatible HTTP endpoint. Advice is best effort:
any failure yields a fixed fallback message instead of an error.
"""

import logging
from datetime import datetime
from typing import Optional

import httpx

from .calculations import evaluate
from .config import Settings, get_settings
from .state import MotorbikeState

logger = logging.getLogger(__name__)

FALLBACK_ADVICE = (
    "Our expert mechanic is currently unavailable. Please ensure your oil and "
    "tire pressure are checked before your next ride. Ride safe!"
)
EMPTY_ADVICE = (
    "Ride safely! Perform regular checks to ensure your motorcycle remains in "
    "peak condition."
)


def build_prompt(state: MotorbikeState, now: datetime) -> str:
    """Summarize the current state for the advisory service."""
    lines = []
    for item in state.maintenance_items:
        health = evaluate(item, state.current_odo, now)
        lines.append(
            f"- {item.name}: Last serviced at {item.last_service_odo:,.0f} km "
            f"({item.description}) - {health.status.label}, "
            f"{health.percentage:.0f}% remaining"
        )
    items = "\n".join(lines)
    return (
        "Act as a world-class professional motorcycle mechanic.\n"
        f"The user's current odometer is {state.current_odo:,.0f} km.\n"
        "Here is their current maintenance status:\n"
        f"{items}\n\n"
        "Please provide concise, professional, and actionable advice in English.\n"
        "Focus on the most critical maintenance items based on the current mileage.\n"
        "Use professional yet encouraging tone.\n"
        "Keep the response under 150 words."
    )


class AdvisoryClient:
    """Client for the advisory text service."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self.transport = transport

    def _generate(self, prompt: str) -> str:
        with httpx.Client(
            base_url=self.settings.advisory_url,
            timeout=self.settings.advisory_timeout,
            transport=self.transport,
        ) as client:
            response = client.post(
                "/api/generate",
                json={
                    "model": self.settings.advisory_model,
                    "prompt": prompt,
                    "stream": False,
                },
            )
            response.raise_for_status()
            data = response.json()
        return (data.get("response") or "").strip()

    def summarize(self, state: MotorbikeState, now: datetime) -> str:
        """Advice text for the state. Never raises."""
        try:
            text = self._generate(build_prompt(state, now))
        except httpx.TimeoutException:
            logger.warning("Advisory service timed out")
            return FALLBACK_ADVICE
        except httpx.HTTPError as e:
            logger.warning(f"Advisory service request failed: {e}")
            return FALLBACK_ADVICE
        except (httpx.InvalidURL, httpx.StreamError) as e:
            logger.warning(f"Advisory service is misconfigured or unreachable: {e}")
            return FALLBACK_ADVICE
        except (ValueError, AttributeError) as e:
            logger.warning(f"Advisory service returned an unreadable response: {e}")
            return FALLBACK_ADVICE
        return text or EMPTY_ADVICE
