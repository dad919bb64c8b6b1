# ==============================================================================
# SERVICIO DE ESTIMACIÓN DE PRECIO
# ==============================================================================
# Calculadora pública: estima peso y precio de una cucian, ya sea por peso
# total o por conteo de prendas (rangos de peso por prenda).
# ==============================================================================

import math
from typing import Any, Dict, Mapping

from laundry_app.services.errors import InvalidEstimate


SERVICES = {
    'standar': {'name': 'Standar', 'price': 3000, 'lead_time_days': 3},
    'express': {'name': 'Express', 'price': 5000, 'lead_time_days': 1},
}

# Prenda → (peso mínimo, peso máximo) en kg por pieza
GARMENT_WEIGHTS = {
    'Kaos': (0.15, 0.20),
    'Kemeja': (0.20, 0.25),
    'Celana Panjang': (0.30, 0.40),
    'Celana Pendek': (0.15, 0.25),
    'Jaket': (0.50, 0.80),
    'Sweater': (0.40, 0.60),
    'Dress': (0.25, 0.35),
    'Rok': (0.20, 0.30),
    'Underwear': (0.05, 0.10),
    'Kaos Kaki': (0.03, 0.05),
    'Handuk': (0.30, 0.50),
    'Seprai': (0.80, 1.20),
}


class EstimationService:

    def _service(self, service: str) -> Dict[str, Any]:
        key = str(service or 'standar').strip().lower()
        if key not in SERVICES:
            raise InvalidEstimate(f'Servicio desconocido: {service}', service=service)
        return SERVICES[key]

    def _result(self, service: Dict[str, Any], min_weight: float, max_weight: float) -> Dict[str, Any]:
        return {
            'service': service['name'],
            'price_per_kg': service['price'],
            'lead_time_days': service['lead_time_days'],
            'weight_range': [round(min_weight, 2), round(max_weight, 2)],
            'price_range': [
                round(min_weight * service['price'], 2),
                round(max_weight * service['price'], 2)
            ]
        }

    def estimate_by_weight(self, weight: Any, service: str = 'standar') -> Dict[str, Any]:
        """Precio exacto para un peso total conocido."""
        svc = self._service(service)
        try:
            weight = float(weight)
        except (TypeError, ValueError):
            raise InvalidEstimate('Peso inválido', weight=weight)
        if not math.isfinite(weight):
            raise InvalidEstimate('Peso inválido', weight=str(weight))
        if weight <= 0:
            raise InvalidEstimate('El peso debe ser mayor a 0', weight=weight)

        result = self._result(svc, weight, weight)
        result['exact_weight'] = round(weight, 2)
        result['exact_price'] = round(weight * svc['price'], 2)
        return result

    def estimate_by_items(self, counts: Mapping[str, Any], service: str = 'standar') -> Dict[str, Any]:
        """
        Rango de peso y precio a partir de prendas.

        Args:
            counts: {nombre de prenda: cantidad}, nombres sin distinguir mayúsculas
        """
        if counts is not None and not isinstance(counts, Mapping):
            raise InvalidEstimate('Conteo de prendas inválido')
        svc = self._service(service)
        garments = {name.lower(): weights for name, weights in GARMENT_WEIGHTS.items()}

        min_weight = max_weight = 0.0
        pieces = 0
        for name, count in (counts or {}).items():
            weights = garments.get(str(name).strip().lower())
            if weights is None:
                raise InvalidEstimate(f'Prenda desconocida: {name}', garment=name)
            try:
                count = int(count)
            except (TypeError, ValueError):
                raise InvalidEstimate('Cantidad de prendas inválida', garment=name)
            if count < 0:
                raise InvalidEstimate('Cantidad de prendas inválida', garment=name)
            min_weight += count * weights[0]
            max_weight += count * weights[1]
            pieces += count

        if pieces == 0:
            raise InvalidEstimate('Ingrese al menos una prenda')

        result = self._result(svc, min_weight, max_weight)
        result['pieces'] = pieces
        return result
