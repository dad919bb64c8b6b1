# ==============================================================================
# REPOSITORIO DE USUARIOS
# ==============================================================================
# Encapsula todo el acceso a users.json
# Los usuarios se almacenan como diccionario: {username: {password, role}}
# ==============================================================================

import os
from typing import Optional

from laundry_app.models import User
from laundry_app.repositories.base import DictRepository


class UserRepository(DictRepository):
    """
    Repositorio de usuarios del panel.

    Formato de datos en users.json:
    {
        "admin": {"password": "hashed_pwd", "role": "admin"},
        "kasir1": {"password": "hashed_pwd", "role": "kasir"}
    }
    """

    def __init__(self, base_path: str):
        super().__init__(os.path.join(base_path, 'users.json'))

    def get_user(self, username: str) -> Optional[User]:
        data = self.get_by_id(username)
        return User.from_dict(username, data) if data else None

    def user_exists(self, username: str) -> bool:
        return username in self.get_all()

    def create_user(self, user: User) -> bool:
        """
        Crea un nuevo usuario.

        Returns:
            True si se creó, False si ya existía
        """
        with self._file_lock:
            if self.user_exists(user.username):
                return False
            self.update(user.username, user.to_dict())
            return True

    def count_users(self) -> int:
        return len(self.get_all())

    # NOTA: La validación de credenciales se hace SOLO en UserService
    # usando check_password_hash. El repositorio solo maneja persistencia.
