"""
Studio-Matic API client.

One shared ``httpx.AsyncClient`` carries the session cookie for every call.
Requests are never retried; failures surface as NetworkError / HttpError.
"""
import enum
import logging
from typing import Any, List, Optional

import httpx
import pydantic

from . import config
from .errors import (
    ClientError,
    FetchError,
    HttpError,
    NetworkError,
    NotFoundError,
    ResponseFormatError,
)
from .schemas import Donation, Supporter

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class ResourceKind(enum.Enum):
    DONATIONS = ("donations", "donation", Donation)
    SUPPORTERS = ("supporters", "supporter", Supporter)

    def __init__(self, path, singular, model):
        self.path = path
        self.singular = singular
        self.model = model


class ResourceClient:
    def __init__(self, base_url: Optional[str] = None, http: Optional[httpx.AsyncClient] = None,
                 timeout: float = config.REQUEST_TIMEOUT):
        self.base_url = (base_url or config.resolve_base_url()).rstrip('/')
        if http is None:
            http = httpx.AsyncClient(timeout=timeout, transport=httpx.AsyncHTTPTransport(retries=0))
        self.http = http

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def send(self, method: str, path: str, payload: Any = None,
                   timeout: Optional[float] = None) -> httpx.Response:
        """Issue one request and return the 2xx response.

        Raises NetworkError when no response arrived, ResponseFormatError when
        one arrived but could not be read, and HttpError (with the body text)
        for any other status.
        """
        url = f"{self.base_url}{path}"
        kwargs = {"headers": JSON_HEADERS}
        if payload is not None:
            kwargs["json"] = payload
        if timeout is not None:
            kwargs["timeout"] = timeout
        logger.debug("%s %s", method, url)
        try:
            response = await self.http.request(method, url, **kwargs)
        except httpx.TransportError as e:
            logger.debug("%s %s failed: %s", method, url, e)
            raise NetworkError() from e
        except httpx.RequestError as e:
            # a response arrived but could not be read (bad encoding, redirect loop)
            logger.debug("%s %s unreadable: %s", method, url, e)
            raise ResponseFormatError(f"unreadable response to {method} {path}: {e}") from e
        if not response.is_success:
            logger.debug("%s %s -> %s", method, url, response.status_code)
            raise HttpError(response.status_code, response.text)
        return response

    def _parse(self, kind: ResourceKind, response: httpx.Response, many: bool = False):
        try:
            body = response.json()
            if many:
                return [kind.model.model_validate(item) for item in body]
            return kind.model.model_validate(body)
        except (ValueError, TypeError, pydantic.ValidationError, httpx.DecodingError) as e:
            raise ResponseFormatError(f"unexpected {kind.singular} payload: {e}") from e

    async def list(self, kind: ResourceKind) -> List[Any]:
        """Return the whole collection; an empty list is a normal result"""
        try:
            response = await self.send("GET", f"/{kind.path}")
            return self._parse(kind, response, many=True)
        except ClientError as e:
            raise FetchError(kind.path, e) from e

    async def get(self, kind: ResourceKind, record_id: int):
        try:
            response = await self.send("GET", f"/{kind.path}/{record_id}")
        except HttpError as e:
            raise NotFoundError(e.status, e.text) from e
        return self._parse(kind, response)

    async def create(self, kind: ResourceKind, payload: pydantic.BaseModel):
        response = await self.send("POST", f"/{kind.path}", payload.model_dump())
        return self._parse(kind, response)

    async def update(self, kind: ResourceKind, record_id: int, payload: pydantic.BaseModel):
        response = await self.send("PUT", f"/{kind.path}/{record_id}", payload.model_dump())
        return self._parse(kind, response)

    async def delete(self, kind: ResourceKind, record_id: int) -> None:
        await self.send("DELETE", f"/{kind.path}/{record_id}")
