from flask import Flask, request, session
from functools import wraps
import uuid

from laundry_app import config

# Sistema de profiling interno
from laundry_app.performance_logger import (
    init_profiling,
    profile_function,
    get_function_stats,
    get_log_summary,
)

# ═══════════════════════════════════════════════════════════════════════════
# CONTENEDOR DE DEPENDENCIAS - Servicios y Repositorios
# ═══════════════════════════════════════════════════════════════════════════
# Las rutas solo hacen request → servicio → JSON.
# Toda la lógica de negocio vive en services/.
# ═══════════════════════════════════════════════════════════════════════════
from laundry_app.app_container import get_container
from laundry_app.models import Cart, UserRole
from laundry_app.services.errors import CashierError, EmptyCart, InvalidCustomer

app = Flask(__name__)

# ═══════════════════════════════════════════════════════════════════════════
# INICIALIZAR SISTEMA DE PROFILING
# ═══════════════════════════════════════════════════════════════════════════
# Mide rendimiento de rutas y funciones. Logs en config.LOGS_DIR
# Para desactivar: LAUNDRY_ENABLE_PROFILING=0
init_profiling(app)

# ═══════════════════════════════════════════════════════════════════════════════
# CONFIGURACIÓN DE SESIONES
# ═══════════════════════════════════════════════════════════════════════════════
# SECRET_KEY: En producción DEBE definirse via variable de entorno
# Comando: export LAUNDRY_SECRET_KEY="clave_secreta_larga_y_aleatoria"
_DEFAULT_SECRET = "laundry_app_dev_secret_key_change_in_production"

if config.PRODUCTION_MODE and not config.SECRET_KEY:
    print("[ADVERTENCIA] LAUNDRY_PRODUCTION_MODE activo sin LAUNDRY_SECRET_KEY definida")
    print("[ADVERTENCIA] Define la variable de entorno para mayor seguridad")

app.secret_key = config.SECRET_KEY or _DEFAULT_SECRET

app.config.update(
    SESSION_COOKIE_HTTPONLY=True,      # Protege contra XSS
    SESSION_COOKIE_SECURE=False,       # False para HTTP local (True solo para HTTPS)
    SESSION_COOKIE_SAMESITE='Lax',     # Protección CSRF básica
    PERMANENT_SESSION_LIFETIME=86400,  # 24 horas
    MAX_CONTENT_LENGTH=1 * 1024 * 1024,
)

# Modo demo: catálogo, promociones y admin de ejemplo
if not config.PRODUCTION_MODE:
    get_container().seed_demo_data(config.DEFAULT_ADMIN_USER, config.DEFAULT_ADMIN_PASSWORD)


# ═══════════════════════════════════════════════════════════════════════════════
# SESIÓN, CSRF Y ERRORES
# ═══════════════════════════════════════════════════════════════════════════════

def login_required(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        if "user" not in session:
            return {"ok": False, "error": "Debes iniciar sesión."}, 401
        return f(*args, **kwargs)
    return wrapper


def admin_required(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        if session.get("role") != UserRole.ADMIN.value:
            return {"ok": False, "error": "Permiso denegado."}, 403
        return f(*args, **kwargs)
    return wrapper


def generate_csrf_token():
    if 'csrf_token' not in session:
        session['csrf_token'] = uuid.uuid4().hex
    return session['csrf_token']


def verify_csrf(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        if request.method == 'POST':
            token = session.get('csrf_token')
            form_token = (
                request.headers.get('X-CSRF-Token') or
                request.headers.get('X-CSRFToken')
            )
            if not form_token and request.is_json:
                json_data = request.get_json(silent=True)
                if isinstance(json_data, dict):
                    form_token = json_data.get('csrf_token')

            if not token or not form_token or token != form_token:
                return {"ok": False, "error": "CSRF token inválido"}, 403
        return f(*args, **kwargs)
    return wrapper


@app.errorhandler(CashierError)
def handle_cashier_error(err):
    """Errores de negocio → {"ok": False, "error", "code"} con su status HTTP."""
    return err.to_dict(), err.http_status


@app.after_request
def set_security_headers(response):
    response.headers['X-Frame-Options'] = 'DENY'
    response.headers['X-Content-Type-Options'] = 'nosniff'
    response.headers['Referrer-Policy'] = 'no-referrer-when-downgrade'
    if request.is_secure:
        response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
    return response


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _current_user():
    return session.get("user")


# Carrito en sesión: session['carrito'] = Cart.to_dict()
def _load_cart() -> Cart:
    return Cart.from_dict(session.get("carrito"))


def _save_cart(cart: Cart) -> None:
    session["carrito"] = cart.to_dict()
    session.modified = True


def _cart_response(cart: Cart, **extra):
    data = {"ok": True, "carrito": get_container().cart_service.summary(cart)}
    data.update(extra)
    return data


def _promo_codes(cart: Cart):
    return [p.code for p in cart.applied_promos]


def _dropped(before, cart: Cart):
    """Códigos que el carrito perdió tras una modificación de líneas."""
    after = set(_promo_codes(cart))
    return [code for code in before if code not in after]


def _amount(data, default=None):
    for key in ("quantity_or_weight", "quantity", "weight"):
        if data.get(key) is not None:
            return data[key]
    return default


# ═══════════════════════════════════════════════════════════════════════════════
# AUTENTICACIÓN
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/api/auth/login", methods=["POST"])
def api_login():
    """
    Inicia sesión. No requiere CSRF (aún no hay sesión).
    Retorna el csrf_token para las siguientes peticiones.
    """
    data = _json_body()
    username = (data.get("username") or "").strip()
    password = data.get("password") or ""
    if not username or not password:
        return {"ok": False, "error": "Usuario y contraseña requeridos."}, 400

    user = get_container().user_service.authenticate(username, password)
    if not user:
        return {"ok": False, "error": "Usuario o contraseña incorrecta."}, 401

    session.clear()
    session.permanent = True
    session["user"] = user["username"]
    session["role"] = user["role"]
    return {"ok": True, "user": user, "csrf_token": generate_csrf_token()}


@app.route("/api/auth/logout", methods=["POST"])
@login_required
@verify_csrf
def api_logout():
    user = _current_user()
    session.clear()
    get_container().user_service.logout(user)
    return {"ok": True, "mensaje": "Sesión cerrada"}


@app.route("/api/auth/verify", methods=["GET"])
@login_required
def api_verify():
    return {
        "ok": True,
        "user": {"username": session["user"], "role": session.get("role")},
        "csrf_token": generate_csrf_token()
    }


# ═══════════════════════════════════════════════════════════════════════════════
# CATÁLOGO, CLIENTES, ESTADOS, PROMOCIONES
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/api/catalog", methods=["GET"])
@login_required
def api_catalog_list():
    items = get_container().catalog_service.list_items(
        request.args.get("type") or None,
        request.args.get("q") or None
    )
    return {"ok": True, "items": [i.to_dict() for i in items]}


@app.route("/api/catalog", methods=["POST"])
@login_required
@verify_csrf
@admin_required
def api_catalog_create():
    result = get_container().catalog_service.create_item(_json_body())
    return result, (201 if result["ok"] else 400)


@app.route("/api/customers", methods=["GET"])
@login_required
def api_customers_search():
    customers = get_container().customer_service.search_customers(request.args.get("q", ""))
    return {"ok": True, "customers": [c.to_dict() for c in customers]}


@app.route("/api/customers", methods=["POST"])
@login_required
@verify_csrf
def api_customers_create():
    data = _json_body()
    customer = get_container().customer_service.create_customer(
        data.get("name"), data.get("phone"), _current_user()
    )
    return {"ok": True, "customer": customer.to_dict()}, 201


@app.route("/api/order-statuses", methods=["GET"])
@login_required
def api_order_statuses():
    statuses = get_container().order_status_service.list_active_statuses()
    return {"ok": True, "statuses": [s.to_dict() for s in statuses]}


@app.route("/api/promotions", methods=["GET"])
@login_required
def api_promotions_list():
    promos = get_container().promo_service.list_promotions(request.args.get("status") or None)
    return {"ok": True, "promotions": [p.to_dict() for p in promos]}


@app.route("/api/promotions", methods=["POST"])
@login_required
@verify_csrf
@admin_required
def api_promotions_create():
    result = get_container().promo_service.create_promotion(_json_body(), _current_user())
    return result, (201 if result["ok"] else 400)


# ═══════════════════════════════════════════════════════════════════════════════
# CARRITO
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/api/cart", methods=["GET"])
@login_required
def api_cart_view():
    return _cart_response(_load_cart())


@app.route("/api/cart/items", methods=["POST"])
@login_required
@verify_csrf
def api_cart_add():
    """
    Agrega un producto o servicio.
    Body: {"item_id", "variation_id"?, "quantity_or_weight" | "quantity" | "weight"}
    """
    data = _json_body()
    if not data.get("item_id"):
        return {"ok": False, "error": "ID de producto inválido"}, 400

    cart = _load_cart()
    line = get_container().cart_service.add_item(
        cart,
        str(data["item_id"]),
        data.get("variation_id"),
        _amount(data, 1)
    )
    _save_cart(cart)
    return _cart_response(cart, line=line.to_dict())


@app.route("/api/cart/items/<line_id>", methods=["POST"])
@login_required
@verify_csrf
def api_cart_update(line_id):
    cart = _load_cart()
    applied = _promo_codes(cart)
    line = get_container().cart_service.update_line(cart, line_id, _amount(_json_body()))
    _save_cart(cart)
    return _cart_response(cart, line=line.to_dict(), dropped_promos=_dropped(applied, cart))


@app.route("/api/cart/items/<line_id>/remove", methods=["POST"])
@login_required
@verify_csrf
def api_cart_remove(line_id):
    cart = _load_cart()
    applied = _promo_codes(cart)
    removed = get_container().cart_service.remove_line(cart, line_id)
    _save_cart(cart)
    return _cart_response(cart, removed=removed, dropped_promos=_dropped(applied, cart))


@app.route("/api/cart/clear", methods=["POST"])
@login_required
@verify_csrf
def api_cart_clear():
    cart = _load_cart()
    get_container().cart_service.clear(cart)
    _save_cart(cart)
    return _cart_response(cart, mensaje="Carrito vaciado")


@app.route("/api/cart/promos", methods=["POST"])
@login_required
@verify_csrf
def api_cart_apply_promo():
    cart = _load_cart()
    promo = get_container().cart_service.apply_promo(cart, str(_json_body().get("code") or ""))
    _save_cart(cart)
    return _cart_response(cart, mensaje=f"Kode promo {promo.code} berhasil diterapkan!")


@app.route("/api/cart/promos/<code>/remove", methods=["POST"])
@login_required
@verify_csrf
def api_cart_remove_promo(code):
    cart = _load_cart()
    removed = get_container().cart_service.remove_promo(cart, code)
    _save_cart(cart)
    return _cart_response(cart, removed=removed)


@profile_function(name="Confirmar pedido")
def _checkout(cart: Cart, data, user):
    """
    Resuelve el cliente (existente, nuevo o compra rápida) y confirma
    el pedido. No toca la sesión.
    """
    container = get_container()
    if cart.is_empty:
        raise EmptyCart()

    quick_purchase = data.get("quick_purchase") is True
    customer = None
    register_customer = False
    if not quick_purchase:
        if data.get("customer_id"):
            customer = container.customer_service.get_customer(data["customer_id"])
            if customer is None:
                raise InvalidCustomer("Cliente no encontrado", customer_id=data["customer_id"])
        elif data.get("customer"):
            new_customer = data["customer"]
            if not isinstance(new_customer, dict):
                raise InvalidCustomer("Datos de cliente inválidos")
            # se da de alta solo si el pedido se confirma
            customer = container.customer_service.new_customer_ref(
                new_customer.get("name"), new_customer.get("phone")
            )
            register_customer = True

    return container.order_service.submit_order(
        cart,
        customer,
        data.get("payment_method", "cash"),
        data.get("payment_status", "unpaid"),
        order_status_id=data.get("order_status_id"),
        notes=data.get("notes", ""),
        print_receipt=data.get("print_receipt") is True,
        quick_purchase=quick_purchase,
        user=user,
        register_customer=register_customer
    )


@app.route("/api/cart/checkout", methods=["POST"])
@login_required
@verify_csrf
def api_cart_checkout():
    """
    Confirma el carrito como pedido y lo vacía.

    Body JSON:
    {
        "customer_id": "1"  |  "customer": {"name": "...", "phone": "..."}  |  "quick_purchase": true,
        "payment_method": "cash" | "qris" | "transfer",
        "payment_status": "paid" | "unpaid",
        "order_status_id": "1",
        "notes": "...",
        "print_receipt": true
    }
    """
    cart = _load_cart()
    order = _checkout(cart, _json_body(), _current_user())

    # Limpiar carrito solo si el pedido fue exitoso
    get_container().cart_service.clear(cart)
    _save_cart(cart)

    return {
        "ok": True,
        "order": order.to_dict(),
        "mensaje": f"Pedido {order.invoice} registrado"
    }, 201


# ═══════════════════════════════════════════════════════════════════════════════
# PEDIDOS
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/api/orders", methods=["GET"])
@login_required
def api_orders_list():
    orders = get_container().order_service.list_orders(
        request.args.get("status") or None,
        request.args.get("q") or None
    )
    return {"ok": True, "orders": [o.to_dict() for o in orders]}


@app.route("/api/orders/lookup", methods=["GET"])
def api_orders_lookup():
    """Consulta pública (cek status) por factura o teléfono."""
    results = get_container().order_service.lookup_orders(request.args.get("q", ""))
    return {"ok": True, "orders": results}


@app.route("/api/orders/<invoice>", methods=["GET"])
@login_required
def api_order_detail(invoice):
    return {"ok": True, "order": get_container().order_service.get_order(invoice).to_dict()}


@app.route("/api/orders/<invoice>/status", methods=["POST"])
@login_required
@verify_csrf
def api_order_status(invoice):
    status_id = _json_body().get("status_id")
    if not status_id:
        return {"ok": False, "error": "Estado requerido"}, 400
    order = get_container().order_service.update_status(invoice, str(status_id), _current_user())
    return {"ok": True, "order": order.to_dict()}


@app.route("/api/orders/<invoice>/pay", methods=["POST"])
@login_required
@verify_csrf
def api_order_pay(invoice):
    order = get_container().order_service.mark_paid(invoice, _current_user())
    return {"ok": True, "order": order.to_dict()}


# ═══════════════════════════════════════════════════════════════════════════════
# ESTIMACIÓN PÚBLICA
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/api/estimate", methods=["POST"])
def api_estimate():
    """
    Body: {"service": "standar"|"express", "method": "weight"|"items",
           "weight": 3.5, "items": {"Kaos": 5, "Jaket": 1}}
    """
    data = _json_body()
    service = data.get("service", "standar")
    estimation = get_container().estimation_service
    if data.get("method", "weight") == "items":
        result = estimation.estimate_by_items(data.get("items") or {}, service)
    else:
        result = estimation.estimate_by_weight(data.get("weight"), service)
    return {"ok": True, "estimate": result}


# ═══════════════════════════════════════════════════════════════════════════════
# ADMINISTRACIÓN
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/api/audit", methods=["GET"])
@login_required
@admin_required
def api_audit():
    audit = get_container().audit_service
    query = request.args.get("q", "")
    log_type = request.args.get("type") or None
    if query or log_type:
        logs = audit.search_logs(query, log_type)
    else:
        logs = audit.get_recent_logs(request.args.get("limit", 100, type=int))
    return {"ok": True, "logs": logs}


@app.route("/api/system/performance", methods=["GET"])
@login_required
@admin_required
def api_performance():
    return {"ok": True, "functions": get_function_stats(), "logs": get_log_summary()}


if __name__ == "__main__":
    # En producción usar WSGI (gunicorn wsgi:app)
    if not config.FLASK_DEBUG:
        print(f"\n{'='*50}")
        print(f"  Servidor iniciado en http://{config.FLASK_HOST}:{config.FLASK_PORT}")
        print(f"{'='*50}\n")

    app.run(debug=config.FLASK_DEBUG, host=config.FLASK_HOST, port=config.FLASK_PORT)
