# ==============================================================================
# REPOSITORIO DE CATÁLOGO
# ==============================================================================
# Encapsula todo el acceso a catalog.json
# El catálogo se almacena como lista: [{item1}, {item2}, ...]
# ==============================================================================

import os
from typing import List, Optional

from laundry_app.models import CatalogItem
from laundry_app.repositories.base import ListRepository


class CatalogRepository(ListRepository):
    """
    Repositorio de productos y servicios.

    Formato de datos en catalog.json:
    [
        {
            "id": "1",
            "name": "Cuci Kiloan Reguler",
            "sku": "SRV-CKR001",
            "type": "service",
            "price": 3000,
            "leadTimeDays": 3,
            "hasVariations": false,
            "variations": [],
            "status": "active"
        }
    ]
    """

    def __init__(self, base_path: str):
        super().__init__(os.path.join(base_path, 'catalog.json'))

    def list_items(self) -> List[CatalogItem]:
        return [CatalogItem.from_dict(d) for d in self.get_all()]

    def get_item(self, item_id: str) -> Optional[CatalogItem]:
        data = self.find_by('id', str(item_id))
        return CatalogItem.from_dict(data) if data else None

    def save_item(self, item: CatalogItem) -> None:
        """Crea o reemplaza un ítem según su ID."""
        with self._file_lock:
            if not self.replace_where('id', item.id, item.to_dict()):
                self.append(item.to_dict())
