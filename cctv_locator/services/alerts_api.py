# cctv_locator/services/alerts_api.py
import logging
from typing import Any, List, Optional
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from ..core.config import settings
from ..schemas.alerts import Alert
from ..utils.http import get_json, delete

logger = logging.getLogger(__name__)

_payload_adapter = TypeAdapter(List[Any])


class UpstreamPayloadError(ValueError):
    """The alert service answered 2xx with a body that is not a list of records."""


class AlertsClient:
    """Thin client for the upstream alert store (fetch / delete only)."""

    def __init__(self, base_url: str | None = None, timeout: float | None = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = (base_url or settings.alerts_api_base).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.alerts_api_timeout
        self.transport = transport

    async def fetch_alerts(self) -> List[Alert]:
        try:
            data = await get_json(f"{self.base_url}/fetch-alerts", timeout=self.timeout, transport=self.transport)
        except ValueError as e:
            raise UpstreamPayloadError(f"alert service sent invalid JSON: {e}") from e
        try:
            items = _payload_adapter.validate_python(data, strict=True)
        except ValidationError as e:
            raise UpstreamPayloadError(f"expected a list of alerts, got {type(data).__name__}") from e

        alerts: List[Alert] = []
        for item in items:
            try:
                alerts.append(Alert.model_validate(item))
            except ValidationError as e:
                # records without an id cannot be acted on; skip them
                logger.warning("Skipping malformed alert record: %s", e.errors()[0].get("msg"))
        return alerts

    async def delete_alert(self, alert_id: str) -> bool:
        """True once deleted, False if upstream has no such alert. Other failures raise."""
        url = f"{self.base_url}/delete-alerts/{quote(alert_id, safe='')}"
        try:
            await delete(url, timeout=self.timeout, transport=self.transport)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                logger.info("Upstream has no alert %s", alert_id)
                return False
            raise
        return True


def get_alerts_client() -> AlertsClient:
    return AlertsClient()
