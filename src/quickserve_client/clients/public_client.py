from __future__ import annotations

from typing import Any, Mapping

from ..http_client import Payload
from ..models import ProviderSearchQuery
from .base import BaseClient


class PublicClient(BaseClient):
    def get_categories(self) -> Payload:
        return self._request("GET", "/public/categories")

    def search_providers(self, query: ProviderSearchQuery | Mapping[str, Any] | None = None) -> Payload:
        if query is None:
            query = ProviderSearchQuery()
        elif not isinstance(query, ProviderSearchQuery):
            query = ProviderSearchQuery.model_validate(dict(query))
        return self._request("GET", "/public/providers", params=query.to_params() or None)

    def get_provider_details(self, provider_id: int | str) -> Payload:
        return self._request("GET", f"/public/providers/{provider_id}")

    def get_provider_reviews(self, provider_id: int | str, *, page: int = 0, size: int = 10) -> Payload:
        return self._request(
            "GET",
            f"/public/providers/{provider_id}/reviews",
            params={"page": page, "size": size},
        )
