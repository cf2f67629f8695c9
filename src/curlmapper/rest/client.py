from typing import Any, Dict, Mapping, Optional, Sequence, Union
import json
import logging

import httpx

from ..core.engine import EngineConfig, MappingLike, PayloadBuilder
from ..core.models import ApiConfig
from .exceptions import DispatchError
from .models import DispatchResult


def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


class RequestDispatcher:
    """
    Sends one request per data row to the endpoint described by an ApiConfig.

    Example:
        >>> from curlmapper.rest.client import RequestDispatcher
        >>> with RequestDispatcher(api_config, mappings) as dispatcher:
        ...     result = dispatcher.send({"SKU": "A1", "Qty": "2"})
        ...     result.ok, result.status_code
    """

    def __init__(
        self,
        api_config: Union[ApiConfig, Dict[str, Any]],
        mappings: Sequence[MappingLike],
        *,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
        logger: Optional[logging.Logger] = None,
        preview_chars: int = 200,
        engine_config: Optional[EngineConfig] = None,
    ):
        if isinstance(api_config, dict):
            api_config = ApiConfig.model_validate(api_config)
        if not api_config.url:
            raise DispatchError("ApiConfig.url must be a non-empty string.")

        self.api_config = api_config
        self.builder = PayloadBuilder(mappings, config=engine_config)
        self.timeout = timeout
        self.preview_chars = preview_chars
        self.logger = logger
        self._client = client or httpx.Client(timeout=timeout)
        self._closed = False

    def headers(self) -> Dict[str, str]:
        headers = dict(self.api_config.headers)
        if not any(k.lower() == "content-type" for k in headers):
            headers["Content-Type"] = "application/json"
        return headers

    def build_payload(self, row: Mapping[str, str]) -> Dict[str, Any]:
        return self.builder.build(row)

    def send(self, row: Mapping[str, str]) -> DispatchResult:
        if self._closed:
            raise DispatchError("Dispatcher is closed.")

        payload = self.build_payload(row)
        try:
            body = json.dumps(payload, ensure_ascii=False, allow_nan=False).encode("utf-8")
        except ValueError as e:
            if self.logger:
                self.logger.warning("Payload for %s is not valid JSON: %s", self.api_config.url, e)
            return DispatchResult(ok=False, status_code=0, response_preview=f"Payload is not valid JSON: {e}", payload=payload)

        try:
            response = self._client.request(
                self.api_config.method,
                self.api_config.url,
                headers=self.headers(),
                content=body,
            )
        except httpx.RequestError as e:
            if self.logger:
                self.logger.warning("Request to %s failed: %r", self.api_config.url, e)
            return DispatchResult(ok=False, status_code=0, response_preview=str(e) or repr(e), payload=payload)

        if self.logger:
            self.logger.info("%s %s -> %s", self.api_config.method, self.api_config.url, response.status_code)

        return DispatchResult(
            ok=response.is_success,
            status_code=response.status_code,
            response_preview=truncate(response.text, self.preview_chars),
            payload=payload,
        )

    def close(self):
        self._closed = True
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
