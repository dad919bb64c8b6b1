# ==============================================================================
# SERVICIO DE CATÁLOGO
# ==============================================================================
# Productos (por unidad, con stock) y servicios (por kilo, con días de
# proceso) que se venden en caja.
# ==============================================================================

from datetime import datetime
from typing import Any, Dict, List, Optional

from laundry_app.models import CatalogItem, ItemType
from laundry_app.repositories.interfaces import ICatalogRepository
from laundry_app.services.errors import CatalogItemNotFound


class CatalogService:
    """
    Servicio de catálogo.

    Responsabilidades:
    - Listado con filtro por tipo y búsqueda por nombre/SKU
    - Alta de ítems (administración)
    """

    def __init__(self, catalog_repo: ICatalogRepository):
        self.catalog_repo = catalog_repo

    def list_items(self, item_type: Optional[str] = None, search: Optional[str] = None) -> List[CatalogItem]:
        """
        Args:
            item_type: 'product' o 'service' (None = todos)
            search: Texto contenido en nombre o SKU (sin mayúsculas)
        """
        items = self.catalog_repo.list_items()
        if item_type:
            items = [i for i in items if i.type.value == item_type]
        if search:
            term = search.strip().lower()
            items = [i for i in items if term in i.name.lower() or term in i.sku.lower()]
        return items

    def get_item(self, item_id: str) -> CatalogItem:
        item = self.catalog_repo.get_item(str(item_id))
        if item is None:
            raise CatalogItemNotFound(item_id=item_id)
        return item

    def create_item(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Crea un producto o servicio.

        Returns:
            Dict con resultado (ok, error, item)
        """
        name = (data.get('name') or '').strip()
        sku = (data.get('sku') or '').strip()
        if len(name) < 3:
            return {'ok': False, 'error': 'El nombre debe tener al menos 3 caracteres'}
        if not sku:
            return {'ok': False, 'error': 'SKU requerido'}

        try:
            ItemType(data.get('type', 'service'))
        except ValueError:
            return {'ok': False, 'error': 'Tipo inválido (product o service)'}

        existing = self.catalog_repo.list_items()
        skus = {i.sku for i in existing}
        skus.update(v.sku for i in existing for v in i.variations)
        if sku in skus:
            return {'ok': False, 'error': f'El SKU {sku} ya está en uso'}

        if data.get('hasVariations') and not data.get('variations'):
            return {'ok': False, 'error': 'Un ítem con variaciones necesita al menos una variación'}

        record = dict(data)
        record['id'] = str(max((int(i.id) for i in existing if i.id.isdigit()), default=0) + 1)
        record['name'] = name
        record['sku'] = sku
        record.setdefault('createdAt', datetime.now().strftime('%Y-%m-%d'))

        try:
            item = CatalogItem.from_dict(record)
        except (TypeError, ValueError):
            return {'ok': False, 'error': 'Datos de ítem inválidos'}

        if item.price < 0 or any(v.price < 0 for v in item.variations):
            return {'ok': False, 'error': 'El precio no puede ser negativo'}

        self.catalog_repo.save_item(item)
        return {'ok': True, 'item': item.to_dict()}
