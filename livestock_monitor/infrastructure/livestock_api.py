"""HTTP client for the livestock behaviour inference service."""

from __future__ import annotations

import mimetypes
from typing import Any

import httpx
from pydantic import ValidationError

from ..crosscutting.logging_setup import get_logger
from ..domain.api_models import (
    DeleteResponseModel,
    DetectionModel,
    HealthResponseModel,
    PredictionResponseModel,
)
from ..shared.errors import LivestockApiError


class LivestockApiClient:
    """Thin async wrapper over the service's REST endpoints.

    Each call opens a short-lived :class:`httpx.AsyncClient`. Failures are
    raised as :class:`LivestockApiError` and are never retried.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        logger=None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._logger = logger or get_logger(__name__, base_url=self._base_url)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def check_health(self) -> HealthResponseModel:
        payload = await self._request("GET", "/health", failure="Health check failed")
        return self._parse(HealthResponseModel, payload)

    async def predict_image(self, filename: str, content: bytes) -> PredictionResponseModel:
        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        payload = await self._request(
            "POST",
            "/predict/image",
            failure="Prediction failed",
            include_body=True,
            files={"file": (filename, content, content_type)},
        )
        response = self._parse(PredictionResponseModel, payload)
        self._logger.info(
            "api.prediction.completed",
            filename=response.filename,
            detections=len(response.detections),
        )
        return response

    async def list_detections(self) -> list[DetectionModel]:
        payload = await self._request("GET", "/detections", failure="Failed to fetch detections")
        if not isinstance(payload, list):
            raise LivestockApiError("Failed to fetch detections: expected a JSON array")
        return [self._parse(DetectionModel, item) for item in payload]

    async def get_detection(self, detection_id: str) -> DetectionModel:
        payload = await self._request(
            "GET", f"/detections/{detection_id}", failure="Failed to fetch detection"
        )
        return self._parse(DetectionModel, payload)

    async def delete_detection(self, detection_id: str) -> DeleteResponseModel:
        payload = await self._request(
            "DELETE", f"/detections/{detection_id}", failure="Failed to delete detection"
        )
        return self._parse(DeleteResponseModel, payload)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        failure: str,
        include_body: bool = False,
        **kwargs: Any,
    ) -> Any:
        url = f"{self._base_url}{path}"
        async with httpx.AsyncClient(
            timeout=self._timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            try:
                response = await client.request(method, url, headers={"Accept": "application/json"}, **kwargs)
            except httpx.HTTPError as exc:
                self._logger.warning("api.request.failed", method=method, path=path, error=str(exc))
                raise LivestockApiError(f"{failure}: {exc}") from exc

        if response.is_error:
            self._logger.warning(
                "api.request.rejected",
                method=method,
                path=path,
                status=response.status_code,
            )
            message = f"{failure}: {response.text}" if include_body else failure
            raise LivestockApiError(message, status_code=response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise LivestockApiError(f"{failure}: response is not JSON") from exc

    @staticmethod
    def _parse(model, payload: Any):
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise LivestockApiError(f"Unexpected response shape: {exc.error_count()} error(s)") from exc


__all__ = ["LivestockApiClient"]
