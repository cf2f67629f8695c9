"""
Shared test fixtures.
"""

import json
from typing import Callable, List

import httpx
import pytest

from curlmapper.core.models import ApiConfig, FieldMapping


# ===================
# MAPPINGS AND ROWS
# ===================

@pytest.fixture
def api_config() -> ApiConfig:
    return ApiConfig(
        method="POST",
        url="https://api.example.com/v1/orders",
        headers={"Authorization": "Bearer test-token"},
        body_template={"sku": "A1", "qty": 1},
    )


@pytest.fixture
def order_mappings() -> List[FieldMapping]:
    return [
        FieldMapping(json_path="sku", data_type="string", csv_header="SKU"),
        FieldMapping(json_path="qty", data_type="number", csv_header="Qty"),
        FieldMapping(json_path="channel", data_type="string", default_value="import"),
    ]


@pytest.fixture
def order_rows() -> List[dict]:
    return [
        {"SKU": "A1", "Qty": "2"},
        {"SKU": "bad", "Qty": "x"},
        {"SKU": "C3", "Qty": "7"},
    ]


# ===================
# HTTP TRANSPORT
# ===================

class RecordingHandler:
    """MockTransport handler that records request bodies and answers per SKU."""

    def __init__(self, fail_skus=("bad",), status: int = 201):
        self.fail_skus = set(fail_skus)
        self.status = status
        self.requests: List[httpx.Request] = []

    @property
    def bodies(self) -> List[dict]:
        return [json.loads(r.content) for r in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body = json.loads(request.content)
        if body.get("sku") in self.fail_skus:
            return httpx.Response(422, text="invalid sku")
        return httpx.Response(self.status, json={"id": len(self.requests)})


@pytest.fixture
def recording_handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.Client]:
    def _make(handler):
        return httpx.Client(transport=httpx.MockTransport(handler))
    return _make
