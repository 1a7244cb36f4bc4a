"""Single-attempt REST lookups against the user and product services.

Each lookup is one ``GET {base_url}/{resource}?id={id}``. Anything short of a
2xx response whose body decodes cleanly into the expected snapshot becomes a
:class:`FetchFailed`.
"""
import logging

import httpx
from pydantic import ValidationError

from .schemas import ProductSnapshot, UserSnapshot

logger = logging.getLogger(__name__)


class FetchFailed(Exception):
    def __init__(self, resource: str, entity_id: int, message: str, status_code=None):
        super().__init__(message)
        self.resource = resource
        self.entity_id = entity_id
        self.status_code = status_code


class RemoteEntityClient:
    """Fetches one entity by id and decodes it into ``schema``.

    Holds no per-request state; one instance serves every request thread.
    """

    def __init__(self, base_url: str, resource: str, schema, http: httpx.Client):
        self.base_url = base_url.rstrip("/")
        self.resource = resource
        self.schema = schema
        self._http = http

    @property
    def url(self) -> str:
        return f"{self.base_url}/{self.resource}"

    def fetch(self, entity_id: int):
        try:
            response = self._http.get(self.url, params={"id": entity_id})
        except httpx.RequestError as e:
            raise FetchFailed(self.resource, entity_id, f"request to {self.url} failed: {e!r}") from e

        if not response.is_success:
            raise FetchFailed(
                self.resource,
                entity_id,
                f"{self.resource} service returned status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            snapshot = self.schema.model_validate_json(response.content)
        except ValidationError as e:
            raise FetchFailed(
                self.resource,
                entity_id,
                f"could not decode {self.resource} body: {e.error_count()} error(s)",
                status_code=response.status_code,
            ) from e

        if snapshot.id != entity_id:
            raise FetchFailed(
                self.resource,
                entity_id,
                f"{self.resource} service answered with id {snapshot.id}",
                status_code=response.status_code,
            )
        logger.debug(f"Fetched {self.resource} {entity_id}")
        return snapshot


def user_client(base_url: str, http: httpx.Client) -> RemoteEntityClient:
    return RemoteEntityClient(base_url, "users", UserSnapshot, http)


def product_client(base_url: str, http: httpx.Client) -> RemoteEntityClient:
    return RemoteEntityClient(base_url, "products", ProductSnapshot, http)
