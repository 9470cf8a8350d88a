"""JSON-file-backed implementation of CatalogRepository.

File layout: ``{"products": [{"id", "store_id"}], "services": [...]}``.
"""

from __future__ import annotations

from settlement.domain.model.order import ItemKind
from settlement.domain.repository.catalog_repository import CatalogRepository
from settlement.infrastructure.persistence.json_file import JsonFileRepository

_SECTIONS = {
    ItemKind.PRODUCT: "products",
    ItemKind.SERVICE: "services",
}


class JsonCatalogRepository(JsonFileRepository, CatalogRepository):

    _empty = {"products": [], "services": []}

    def store_id_for(self, kind: ItemKind, catalog_id: str) -> str | None:
        for raw in self._load_raw().get(_SECTIONS[kind], []):
            if raw["id"] == catalog_id:
                return raw.get("store_id")
        return None
