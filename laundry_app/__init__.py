# ==============================================================================
# LAUNDRY APP - Caja y pedidos de una lavandería
# ==============================================================================
# Capas:
#   main.py         → rutas Flask (solo request → servicio → JSON)
#   services/       → lógica de negocio de la caja
#   repositories/   → persistencia JSON detrás de interfaces
#   models/         → entidades (dataclasses)
# ==============================================================================

__version__ = '1.0.0'
