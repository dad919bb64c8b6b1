# ==============================================================================
# SERVICIO DE USUARIOS
# ==============================================================================
# Autenticación del panel de administración y alta de usuarios.
#
# - Este servicio NO depende del tipo de almacenamiento
# - Toda validación de credenciales está aquí, NO en rutas
# ==============================================================================

from typing import Any, Dict, Optional
from werkzeug.security import generate_password_hash, check_password_hash

from laundry_app.models import User, UserRole
from laundry_app.repositories.user_repository import UserRepository
from laundry_app.services.audit_service import AuditService


class UserService:
    """
    Servicio para gestión de usuarios.

    Responsabilidades:
    - Autenticación (login/logout)
    - Alta de usuarios con contraseña hasheada
    - Usuario administrador inicial
    """

    VALID_ROLES = frozenset(role.value for role in UserRole)

    def __init__(
        self,
        user_repo: UserRepository,
        audit_service: AuditService = None
    ):
        self.user_repo = user_repo
        self.audit_service = audit_service

    def normalize_role(self, role: Optional[str]) -> str:
        """Rol válido; cualquier valor desconocido cae en kasir."""
        role = (role or '').strip().lower()
        return role if role in self.VALID_ROLES else UserRole.KASIR.value

    # =========================================================================
    # AUTENTICACIÓN
    # =========================================================================

    def authenticate(self, username: str, password: str) -> Optional[Dict[str, Any]]:
        """
        Autentica un usuario.

        Args:
            username: Nombre de usuario
            password: Contraseña en texto plano

        Returns:
            Dict con username y role si es válido, None si no
        """
        if not username or not password:
            return None

        user = self.user_repo.get_user(username.strip())
        if not user or not user.password_hash:
            return None

        if not check_password_hash(user.password_hash, password):
            return None

        if self.audit_service:
            self.audit_service.log_user_login(user.username)

        return {
            'username': user.username,
            'role': user.role.value
        }

    def logout(self, username: str) -> None:
        if self.audit_service:
            self.audit_service.log_user_logout(username)

    def get_user(self, username: str) -> Optional[Dict[str, Any]]:
        """Datos públicos del usuario (sin password) o None."""
        user = self.user_repo.get_user(username)
        if not user:
            return None
        return {'username': user.username, 'role': user.role.value}

    # =========================================================================
    # ALTA DE USUARIOS
    # =========================================================================

    def create_user(
        self,
        username: str,
        password: str,
        role: str = UserRole.KASIR.value,
        admin_user: str = None
    ) -> Dict[str, Any]:
        """
        Crea un nuevo usuario.

        Returns:
            Dict con resultado (ok, error, etc.)
        """
        if not username or not username.strip():
            return {'ok': False, 'error': 'Nombre de usuario requerido'}

        if not password:
            return {'ok': False, 'error': 'Contraseña requerida'}

        username = username.strip()
        role = self.normalize_role(role)

        user = User(
            username=username,
            password_hash=generate_password_hash(password),
            role=UserRole(role)
        )
        if not self.user_repo.create_user(user):
            return {'ok': False, 'error': 'El usuario ya existe'}

        if self.audit_service:
            self.audit_service.log_user_created(admin_user or 'sistema', username, role)

        return {'ok': True, 'username': username, 'role': role}

    def ensure_default_admin(self, username: str, password: str) -> bool:
        """
        Crea el administrador inicial si no hay ningún usuario.

        Returns:
            True si se creó
        """
        if self.user_repo.count_users() > 0:
            return False
        result = self.create_user(username, password, UserRole.ADMIN.value)
        return result['ok']
