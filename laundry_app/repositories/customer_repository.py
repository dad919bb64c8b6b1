# ==============================================================================
# REPOSITORIO DE CLIENTES
# ==============================================================================
# Encapsula todo el acceso a customers.json
# ==============================================================================

import os
from datetime import datetime
from typing import List, Optional

from laundry_app.models import Customer
from laundry_app.repositories.base import ListRepository


class CustomerRepository(ListRepository):
    """
    Repositorio de clientes.

    Formato de datos en customers.json:
    [
        {"id": "1", "name": "Ahmad Santoso", "phone": "081234567890",
         "totalOrders": 15, "totalSpent": 450000, ...}
    ]
    """

    def __init__(self, base_path: str):
        super().__init__(os.path.join(base_path, 'customers.json'))

    def list_customers(self) -> List[Customer]:
        return [Customer.from_dict(d) for d in self.get_all()]

    def search(self, term: str) -> List[Customer]:
        """Nombre o teléfono que contiene el término (sin mayúsculas)."""
        term = (term or '').strip().lower()
        customers = self.list_customers()
        if not term:
            return customers
        return [
            c for c in customers
            if term in c.name.lower() or term in (c.phone or '').lower()
        ]

    def get(self, customer_id: str) -> Optional[Customer]:
        data = self.find_by('id', str(customer_id))
        return Customer.from_dict(data) if data else None

    def create(self, customer: Customer) -> Customer:
        """Asigna ID y fecha de alta, y persiste."""
        with self._file_lock:
            customer.id = self.next_numeric_id()
            if not customer.created_at:
                customer.created_at = datetime.now().strftime('%Y-%m-%d')
            self.append(customer.to_dict())
        return customer

    def update(self, customer: Customer) -> None:
        self.replace_where('id', customer.id, customer.to_dict())
