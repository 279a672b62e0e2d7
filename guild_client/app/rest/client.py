"""
REST client for the remote API.
"""

from typing import Any, Dict, Optional

import httpx

from shared.config import ClientConfig
from shared.errors import DiscordAPIError, HTTPError
from shared.logging import get_logger
from shared.metrics import MetricsCollector


class RESTClient:
    """Thin async wrapper over the remote REST API."""

    def __init__(self, config: ClientConfig, metrics: MetricsCollector,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.metrics = metrics
        self.logger = get_logger("guilds.rest")

        headers = {"User-Agent": config.user_agent}
        if config.token:
            headers["Authorization"] = f"Bot {config.token}"

        self._client = httpx.AsyncClient(
            base_url=config.api_url,
            headers=headers,
            timeout=config.request_timeout,
            transport=transport
        )

    async def request(self, method: str, path: str, *, json: Any = None,
                      params: Optional[Dict[str, Any]] = None) -> Any:
        """Issue a request and return the decoded JSON body."""
        with self.metrics.time_request(method, path) as outcome:
            try:
                response = await self._client.request(method, path, json=json, params=params)
            except httpx.HTTPError as e:
                self.logger.error("REST transport error", method=method, path=path, error=str(e))
                self.metrics.record_error("http_error")
                raise HTTPError(method, path, str(e), details={"error_type": type(e).__name__}) from e

            outcome["status_code"] = response.status_code

        if response.is_success:
            self.logger.debug("REST request completed", method=method, path=path,
                              status_code=response.status_code)
            if response.status_code == 204 or not response.content:
                return None
            return response.json()

        message = f"Unexpected status {response.status_code}"
        api_code = None
        details: Dict[str, Any] = {}
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("message", message)
            api_code = body.get("code")
            if "errors" in body:
                details["errors"] = body["errors"]
        else:
            details["body"] = response.text

        self.logger.warning(
            "REST request failed",
            method=method,
            path=path,
            status_code=response.status_code,
            api_code=api_code,
            error=message
        )
        self.metrics.record_error("api_error")
        raise DiscordAPIError(response.status_code, method, path, message, api_code, details)

    async def get(self, path: str, **kwargs) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs) -> Any:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs) -> Any:
        return await self.request("DELETE", path, **kwargs)

    async def aclose(self):
        await self._client.aclose()
