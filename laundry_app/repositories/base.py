# ==============================================================================
# REPOSITORIO BASE - Funcionalidad común para acceso a archivos JSON
# ==============================================================================

import json
import os
from typing import Any, Dict, List, Optional
from abc import ABC, abstractmethod
import threading


class BaseRepository(ABC):
    """
    Clase base abstracta para todos los repositorios.
    Proporciona lectura/escritura de archivos JSON con un lock común
    para evitar escrituras concurrentes desde distintos requests.

    Al migrar a una base de datos:
    - Los métodos _read_raw/_write_raw se convertirán en queries
    - El lock se reemplazará por transacciones
    """

    # Lock global para evitar escrituras concurrentes a archivos
    _file_lock = threading.RLock()

    def __init__(self, file_path: str):
        """
        Args:
            file_path: Ruta absoluta al archivo JSON de datos
        """
        self.file_path = file_path
        self._ensure_file_exists()

    def _ensure_file_exists(self) -> None:
        """Crea el archivo con los datos iniciales si no existe."""
        if not os.path.exists(self.file_path):
            self._write_raw(self._initial_data())

    @abstractmethod
    def _empty_data(self) -> Any:
        """Estructura vacía (dict, list) de este repositorio."""

    def _initial_data(self) -> Any:
        """
        Datos con los que se crea el archivo la primera vez.
        Las subclases lo sobrescriben para sembrar valores de sistema.
        """
        return self._empty_data()

    def _read_raw(self) -> Any:
        """
        Lee los datos crudos del archivo JSON.
        Si el archivo está corrupto o fue borrado, retorna datos vacíos.
        """
        with self._file_lock:
            try:
                with open(self.file_path, 'r', encoding='utf-8') as f:
                    return json.load(f)
            except (json.JSONDecodeError, FileNotFoundError):
                return self._empty_data()

    def _write_raw(self, data: Any) -> None:
        """
        Escribe datos al archivo JSON de forma atómica
        (archivo temporal + os.replace).
        """
        with self._file_lock:
            directory = os.path.dirname(self.file_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            temp_path = self.file_path + '.tmp'
            try:
                with open(temp_path, 'w', encoding='utf-8') as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                os.replace(temp_path, self.file_path)
            except Exception:
                if os.path.exists(temp_path):
                    os.remove(temp_path)
                raise


class DictRepository(BaseRepository):
    """
    Repositorio base para datos almacenados como diccionario.
    El ID es la clave del diccionario.

    Ejemplo: users.json -> {"admin": {...}}
    """

    def _empty_data(self) -> Dict:
        return {}

    def get_all(self) -> Dict[str, Any]:
        data = self._read_raw()
        return data if isinstance(data, dict) else {}

    def get_by_id(self, record_id: Any) -> Optional[Dict[str, Any]]:
        return self.get_all().get(str(record_id))

    def save_all(self, data: Dict[str, Any]) -> None:
        self._write_raw(data)

    def update(self, record_id: Any, record_data: Dict[str, Any]) -> None:
        """Crea o reemplaza un registro."""
        with self._file_lock:
            data = self.get_all()
            data[str(record_id)] = record_data
            self._write_raw(data)


class ListRepository(BaseRepository):
    """
    Repositorio base para datos almacenados como lista.

    Ejemplo: orders.json -> [{...}, {...}]
    """

    def _empty_data(self) -> List:
        return []

    def get_all(self) -> List[Dict[str, Any]]:
        data = self._read_raw()
        return data if isinstance(data, list) else []

    def save_all(self, data: List[Dict[str, Any]]) -> None:
        self._write_raw(data)

    def append(self, record: Dict[str, Any]) -> None:
        """Agrega un registro al final."""
        with self._file_lock:
            data = self.get_all()
            data.append(record)
            self._write_raw(data)

    def find_by(self, field: str, value: Any) -> Optional[Dict[str, Any]]:
        """Primer registro cuyo campo coincide, o None."""
        for record in self.get_all():
            if record.get(field) == value:
                return record
        return None

    def replace_where(self, field: str, value: Any, record: Dict[str, Any]) -> bool:
        """
        Reemplaza el primer registro cuyo campo coincide.

        Returns:
            True si se reemplazó
        """
        with self._file_lock:
            data = self.get_all()
            for i, existing in enumerate(data):
                if existing.get(field) == value:
                    data[i] = record
                    self._write_raw(data)
                    return True
            return False

    def next_numeric_id(self, field: str = 'id') -> str:
        """Siguiente ID numérico (como texto) según el máximo existente."""
        max_id = 0
        for record in self.get_all():
            try:
                max_id = max(max_id, int(record.get(field, 0)))
            except (TypeError, ValueError):
                continue
        return str(max_id + 1)
