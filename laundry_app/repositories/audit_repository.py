# ==============================================================================
# REPOSITORIO DE AUDITORÍA
# ==============================================================================
# Encapsula todo el acceso a audit.json
# La auditoría se almacena como lista, más recientes primero.
# ==============================================================================

import os
from typing import Any, Dict, List

from laundry_app.models import AuditLog
from laundry_app.repositories.base import ListRepository


class AuditRepository(ListRepository):
    """
    Repositorio del log de auditoría.

    Formato de datos en audit.json:
    [
        {
            "type": "PEDIDO",
            "user": "admin",
            "message": "Pedido INV1737331200000 creado por admin ...",
            "timestamp": "2025-01-20 10:00:00",
            "related_id": "INV1737331200000",
            "details": {...}
        }
    ]
    """

    # Límite de registros para evitar archivos muy grandes
    MAX_LOGS = 10000

    def __init__(self, base_path: str):
        super().__init__(os.path.join(base_path, 'audit.json'))

    def log(self, entry: AuditLog) -> None:
        """Inserta un evento al inicio (más reciente primero)."""
        with self._file_lock:
            logs = self.get_all()
            logs.insert(0, entry.to_dict())
            self.save_all(logs[:self.MAX_LOGS])

    def search_logs(
        self,
        query: str = '',
        log_type: str = None,
        user: str = None
    ) -> List[Dict[str, Any]]:
        """
        Búsqueda de logs con filtros.

        Args:
            query: Texto a buscar en tipo, usuario, mensaje e ID relacionado
            log_type: Filtrar por tipo
            user: Filtrar por usuario

        Returns:
            Lista de logs que coinciden
        """
        logs = self.get_all()
        if log_type:
            logs = [log for log in logs if log.get('type') == log_type]
        if user:
            logs = [log for log in logs if log.get('user') == user]
        if query:
            query_lower = query.lower()
            logs = [
                log for log in logs
                if any(
                    query_lower in str(log.get(key, '')).lower()
                    for key in ('type', 'user', 'message', 'related_id')
                )
            ]
        return logs

    def get_recent_logs(self, limit: int = 100) -> List[Dict[str, Any]]:
        return self.get_all()[:limit]
