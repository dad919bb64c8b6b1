# ==============================================================================
# CONFIGURACIÓN - Variables de entorno
# ==============================================================================
# Todo lo configurable se lee aquí una sola vez al importar.
#
#   LAUNDRY_SECRET_KEY            Clave de sesión Flask (obligatoria en producción)
#   LAUNDRY_PRODUCTION_MODE       1 = producción (default), 0 = demo con datos de ejemplo
#   LAUNDRY_DATA_DIR              Carpeta de los JSON (default: carpeta del paquete)
#   LAUNDRY_PROMO_LOOKUP_TIMEOUT  Segundos máximos para consultar una promo (default 2)
#   LAUNDRY_ENABLE_PROFILING      1 = escribe logs de rendimiento (default 1)
#   LAUNDRY_LOGS_DIR              Carpeta de logs (default: <paquete>/logs)
#   LAUNDRY_ADMIN_USER / LAUNDRY_ADMIN_PASSWORD  Admin inicial en modo demo
#   FLASK_HOST / FLASK_PORT / FLASK_DEBUG        Servidor de desarrollo
# ==============================================================================

import os


BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        print(f"⚠️ {name}={raw!r} no es un número, usando {default}")
        return default


PRODUCTION_MODE = _env_flag('LAUNDRY_PRODUCTION_MODE', '1')

SECRET_KEY = os.environ.get('LAUNDRY_SECRET_KEY', '')

DATA_DIR = os.environ.get('LAUNDRY_DATA_DIR') or BASE_DIR

PROMO_LOOKUP_TIMEOUT = _env_float('LAUNDRY_PROMO_LOOKUP_TIMEOUT', 2.0)

ENABLE_PROFILING = _env_flag('LAUNDRY_ENABLE_PROFILING', '1')

LOGS_DIR = os.environ.get('LAUNDRY_LOGS_DIR') or os.path.join(BASE_DIR, 'logs')

DEFAULT_ADMIN_USER = os.environ.get('LAUNDRY_ADMIN_USER', 'admin')
DEFAULT_ADMIN_PASSWORD = os.environ.get('LAUNDRY_ADMIN_PASSWORD', 'admin123')

FLASK_HOST = os.environ.get('FLASK_HOST', '127.0.0.1')
FLASK_PORT = int(os.environ.get('FLASK_PORT', '5000'))
FLASK_DEBUG = _env_flag('FLASK_DEBUG', '0')
