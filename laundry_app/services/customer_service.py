# ==============================================================================
# SERVICIO DE CLIENTES
# ==============================================================================

import re
from typing import List, Optional

from laundry_app.models import Customer, CustomerRef
from laundry_app.repositories.interfaces import ICustomerRepository
from laundry_app.services.audit_service import AuditService
from laundry_app.services.errors import InvalidCustomer


PHONE_PATTERN = re.compile(r'^[0-9+\-\s]+$')


class CustomerService:
    """
    Servicio de clientes de la lavandería.

    Responsabilidades:
    - Búsqueda por nombre o teléfono
    - Alta rápida desde la caja (nombre + teléfono)
    - Estadísticas de pedidos por cliente
    """

    def __init__(self, customer_repo: ICustomerRepository, audit_service: AuditService = None):
        self.customer_repo = customer_repo
        self.audit_service = audit_service

    def search_customers(self, term: str = '') -> List[Customer]:
        return self.customer_repo.search(term or '')

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        return self.customer_repo.get(str(customer_id))

    @staticmethod
    def new_customer_ref(name: str, phone: Optional[str] = None) -> CustomerRef:
        """
        Normaliza y valida los datos de un cliente nuevo, sin persistirlo.

        Raises:
            InvalidCustomer: nombre vacío o teléfono con caracteres inválidos
        """
        if not isinstance(name, (str, type(None))) or not isinstance(phone, (str, type(None))):
            raise InvalidCustomer('Datos de cliente inválidos')

        name = (name or '').strip()
        if not name:
            raise InvalidCustomer('El nombre del cliente es requerido')

        phone = (phone or '').strip() or None
        if phone is not None and not PHONE_PATTERN.match(phone):
            raise InvalidCustomer('Formato de teléfono inválido', phone=phone)

        return CustomerRef(name=name, phone=phone)

    def create_customer(self, name: str, phone: Optional[str] = None, user: str = None) -> Customer:
        """
        Registra un cliente nuevo.

        Raises:
            InvalidCustomer
        """
        ref = self.new_customer_ref(name, phone)
        customer = self.customer_repo.create(Customer(id='', name=ref.name, phone=ref.phone))

        if self.audit_service:
            self.audit_service.log_customer_created(user, customer.id, customer.name)

        return customer

    def record_order(self, customer_id: str, total: float, order_date: str) -> None:
        """Suma un pedido a las estadísticas del cliente."""
        customer = self.customer_repo.get(str(customer_id))
        if customer is None:
            return
        customer.total_orders += 1
        customer.total_spent = round(customer.total_spent + total, 2)
        customer.last_order_date = order_date
        self.customer_repo.update(customer)
