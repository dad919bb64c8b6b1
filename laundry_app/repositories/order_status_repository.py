# ==============================================================================
# REPOSITORIO DE ESTADOS DE PEDIDO
# ==============================================================================
# Encapsula todo el acceso a order_statuses.json
# Al crear el archivo se siembran los estados de sistema de la lavandería.
# ==============================================================================

import os
from typing import Any, Dict, List

from laundry_app.models import OrderStatus
from laundry_app.repositories.base import ListRepository


DEFAULT_ORDER_STATUSES: List[Dict[str, Any]] = [
    {'id': '1', 'name': 'Pesanan Diterima', 'icon': '📥', 'order': 1,
     'description': 'Pesanan telah diterima dan sedang menunggu proses',
     'isActive': True, 'isDefault': True, 'progress': 'in-progress'},
    {'id': '2', 'name': 'Sedang Dicuci', 'icon': '🧼', 'order': 2,
     'description': 'Pesanan sedang dalam proses pencucian',
     'isActive': True, 'progress': 'in-progress'},
    {'id': '3', 'name': 'Sedang Dikeringkan', 'icon': '🌞', 'order': 3,
     'description': 'Pesanan sedang dalam proses pengeringan',
     'isActive': True, 'progress': 'in-progress'},
    {'id': '4', 'name': 'Sedang Disetrika', 'icon': '🔥', 'order': 4,
     'description': 'Pesanan sedang dalam proses penyetrikaan',
     'isActive': True, 'progress': 'in-progress'},
    {'id': '5', 'name': 'Siap Diambil', 'icon': '🚚', 'order': 5,
     'description': 'Pesanan telah selesai dan siap untuk diambil',
     'isActive': True, 'progress': 'ready'},
    {'id': '6', 'name': 'Pesanan Selesai', 'icon': '✅', 'order': 6,
     'description': 'Pesanan telah diambil/diterima oleh pelanggan',
     'isActive': True, 'isDefault': True, 'progress': 'completed'},
    {'id': '7', 'name': 'Dibatalkan', 'icon': '❌', 'order': 7,
     'description': 'Pesanan dibatalkan',
     'isActive': True, 'isDefault': True},
]


class OrderStatusRepository(ListRepository):
    """Repositorio de estados configurables de pedido."""

    def __init__(self, base_path: str):
        super().__init__(os.path.join(base_path, 'order_statuses.json'))

    def _initial_data(self) -> List[Dict[str, Any]]:
        return [dict(s) for s in DEFAULT_ORDER_STATUSES]

    def list_statuses(self) -> List[OrderStatus]:
        return [OrderStatus.from_dict(d) for d in self.get_all()]
