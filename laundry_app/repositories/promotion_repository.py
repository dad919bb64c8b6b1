# ==============================================================================
# REPOSITORIO DE PROMOCIONES
# ==============================================================================
# Encapsula todo el acceso a promotions.json
# ==============================================================================

import os
from typing import List, Optional

from laundry_app.models import PromoCode
from laundry_app.repositories.base import ListRepository


class PromotionRepository(ListRepository):
    """
    Repositorio de promociones.

    Formato de datos en promotions.json:
    [
        {
            "id": "1",
            "code": "NEWYEAR25",
            "type": "percentage",
            "value": 25,
            "minOrder": 50000,
            "maxDiscount": 100000,
            "startDate": "2025-01-01",
            "endDate": "2025-01-31",
            "status": "active",
            "usageCount": 45,
            "maxUsage": 100
        }
    ]
    """

    def __init__(self, base_path: str):
        super().__init__(os.path.join(base_path, 'promotions.json'))

    def list_promotions(self) -> List[PromoCode]:
        return [PromoCode.from_dict(d) for d in self.get_all()]

    def find_by_code(self, code: str) -> Optional[PromoCode]:
        """Busca por código sin distinguir mayúsculas."""
        for promo in self.list_promotions():
            if promo.matches(code):
                return promo
        return None

    def save_promotion(self, promo: PromoCode) -> None:
        """Crea o reemplaza una promoción según su ID."""
        with self._file_lock:
            if not self.replace_where('id', promo.id, promo.to_dict()):
                self.append(promo.to_dict())

    def increment_usage(self, code: str) -> bool:
        """
        Suma un uso a la promoción si aún tiene cupo.

        Lectura, verificación de max_usage y escritura ocurren bajo el
        mismo lock.

        Returns:
            True si se contabilizó; False si no existe o agotó sus usos
        """
        with self._file_lock:
            promo = self.find_by_code(code)
            if promo is None or promo.usage_exhausted:
                return False
            promo.usage_count += 1
            self.replace_where('id', promo.id, promo.to_dict())
            return True

    def decrement_usage(self, code: str) -> None:
        """Revierte un uso reservado con increment_usage."""
        with self._file_lock:
            promo = self.find_by_code(code)
            if promo is None or promo.usage_count <= 0:
                return
            promo.usage_count -= 1
            self.replace_where('id', promo.id, promo.to_dict())
