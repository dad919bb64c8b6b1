# ==============================================================================
# REPOSITORIO DE PEDIDOS
# ==============================================================================
# Encapsula todo el acceso a orders.json
# Los pedidos se almacenan como lista, más recientes al final.
# ==============================================================================

import os
from typing import List, Optional

from laundry_app.models import Order
from laundry_app.repositories.base import ListRepository


class OrderRepository(ListRepository):
    """
    Repositorio de pedidos confirmados en caja.

    Formato de datos en orders.json:
    [
        {
            "invoice": "INV1737331200000",
            "dateIn": "2025-01-20",
            "estimatedDone": "2025-01-21",
            "customer": {"id": "1", "name": "Ahmad Santoso", "phone": "0812..."},
            "items": [...],
            "promos": [...],
            "subtotal": 17500, "discount": 0, "total": 17500,
            "paymentMethod": "cash", "paymentStatus": "paid",
            "status": "1", "progress": "in-progress",
            ...
        }
    ]
    """

    INVOICE_PREFIX = 'INV'

    def __init__(self, base_path: str):
        super().__init__(os.path.join(base_path, 'orders.json'))

    def save_order(self, order: Order) -> None:
        self.append(order.to_dict())

    def replace_order(self, order: Order) -> bool:
        return self.replace_where('invoice', order.invoice, order.to_dict())

    def get_by_invoice(self, invoice: str) -> Optional[Order]:
        data = self.find_by('invoice', invoice)
        return Order.from_dict(data) if data else None

    def list_orders(self) -> List[Order]:
        """Pedidos, más recientes primero."""
        return [Order.from_dict(d) for d in reversed(self.get_all())]

    def last_invoice_number(self) -> int:
        """
        Mayor número de factura persistido.
        Ignora facturas con formato distinto a INV<número>.
        """
        max_num = 0
        for record in self.get_all():
            invoice = record.get('invoice', '')
            if invoice.startswith(self.INVOICE_PREFIX):
                try:
                    max_num = max(max_num, int(invoice[len(self.INVOICE_PREFIX):]))
                except ValueError:
                    continue
        return max_num
