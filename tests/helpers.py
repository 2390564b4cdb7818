import copy
from typing import List, Optional

import httpx

from core.errors import DocumentParseError, StoreError
from store.document import TripDocumentClient


class MockResponse:
    def __init__(self, payload=None, status_code: int = 200, invalid_json: bool = False):
        self._payload = payload
        self.status_code = status_code
        self.invalid_json = invalid_json
        self.text = "" if payload is None else str(payload)
        self.request = httpx.Request("GET", "https://mock")

    def json(self):
        if self.invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise httpx.HTTPStatusError(
                "mock error",
                request=self.request,
                response=httpx.Response(self.status_code, request=self.request),
            )


class MockAsyncClient:
    """Stands in for httpx.AsyncClient; answers every request with the next queued response."""

    def __init__(self, *responses: MockResponse):
        self.responses = list(responses)
        self.calls: list[tuple[str, str, dict]] = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    def _next(self) -> MockResponse:
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]

    async def get(self, url: str, params=None, headers=None):
        self.calls.append(("GET", url, {"params": params, "headers": headers}))
        return self._next()

    async def patch(self, url: str, headers=None, json=None):
        self.calls.append(("PATCH", url, {"headers": headers, "json": json}))
        return self._next()


class InMemoryDocumentClient(TripDocumentClient):
    """
    Fake of the remote trip document with the same read/rewrite contract.
    Set fetch_error / save_error to make the next calls fail.
    """

    def __init__(self, trips: Optional[List[dict]] = None):
        super().__init__(api_url="https://store.test/doc", api_key="test-key")
        self.trips: List[dict] = copy.deepcopy(trips or [])
        self.fetch_error: Optional[StoreError] = None
        self.save_error: Optional[StoreError] = None
        self.fetch_count = 0
        self.save_count = 0

    async def fetch_trips(self) -> List[dict]:
        self._credentials()
        self.fetch_count += 1
        if self.fetch_error:
            raise self.fetch_error
        return copy.deepcopy(self.trips)

    async def save_trips(self, trips: List[dict]) -> None:
        self._credentials()
        if self.save_error:
            raise self.save_error
        self.save_count += 1
        self.trips = copy.deepcopy(trips)


def unreadable_document() -> DocumentParseError:
    return DocumentParseError("Store document is not valid JSON")
