# ==============================================================================
# SERVICIO DE ESTADOS DE PEDIDO
# ==============================================================================

from typing import List, Optional

from laundry_app.models import OrderStatus
from laundry_app.repositories.interfaces import IOrderStatusRepository
from laundry_app.services.errors import InvalidOrderStatus


class OrderStatusService:
    """Directorio de estados de pedido (Pesanan Diterima, Sedang Dicuci, ...)."""

    def __init__(self, status_repo: IOrderStatusRepository):
        self.status_repo = status_repo

    def list_statuses(self) -> List[OrderStatus]:
        return sorted(self.status_repo.list_statuses(), key=lambda s: s.order)

    def list_active_statuses(self) -> List[OrderStatus]:
        return [s for s in self.list_statuses() if s.is_active]

    def get_status(self, status_id: str) -> Optional[OrderStatus]:
        for status in self.status_repo.list_statuses():
            if status.id == str(status_id):
                return status
        return None

    def default_status(self) -> OrderStatus:
        """
        Estado inicial de un pedido: el de posición 1 si está activo,
        si no el primero activo.
        """
        active = self.list_active_statuses()
        if not active:
            raise InvalidOrderStatus('No hay estados de pedido activos')
        for status in active:
            if status.order == 1:
                return status
        return active[0]

    def resolve_active(self, status_id: Optional[str]) -> OrderStatus:
        """
        Estado activo con ese ID, o el estado por defecto si es None.

        Raises:
            InvalidOrderStatus
        """
        if status_id is None or status_id == '':
            return self.default_status()
        status = self.get_status(status_id)
        if status is None or not status.is_active:
            raise InvalidOrderStatus(status_id=status_id)
        return status
