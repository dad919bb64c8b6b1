# ==============================================================================
# GENERADOR DE NÚMEROS DE FACTURA
# ==============================================================================
# Formato INV<milisegundos desde epoch>. El número es estrictamente creciente
# dentro del proceso: dos pedidos en el mismo milisegundo reciben números
# consecutivos. Se siembra con la mayor factura persistida.
# ==============================================================================

import threading
import time
from typing import Callable, Optional


def _now_millis() -> int:
    return int(time.time() * 1000)


class InvoiceNumberGenerator:
    """Generador thread-safe de facturas únicas."""

    PREFIX = 'INV'

    def __init__(self, last_number: int = 0, clock: Optional[Callable[[], int]] = None):
        """
        Args:
            last_number: Mayor número ya usado (0 si no hay pedidos)
            clock: Función que retorna milisegundos (inyectable en tests)
        """
        self._lock = threading.Lock()
        self._last = int(last_number)
        self._clock = clock or _now_millis

    @property
    def last_number(self) -> int:
        return self._last

    def next_invoice(self) -> str:
        with self._lock:
            self._last = max(self._clock(), self._last + 1)
            return f"{self.PREFIX}{self._last}"
