# ==============================================================================
# ENTIDADES DEL DOMINIO - Definiciones de dataclasses
# ==============================================================================
# Cada entidad representa un concepto del negocio de la lavandería.
# Diseñadas para ser independientes del mecanismo de persistencia.
# Montos en IDR (float, redondeados a 2 decimales en los bordes).
# ==============================================================================

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any, Tuple
from enum import Enum
from datetime import datetime


# ==============================================================================
# ENUMERACIONES - Estados y tipos válidos
# ==============================================================================

class UserRole(str, Enum):
    """Roles de usuario disponibles en el sistema."""
    ADMIN = "admin"
    KASIR = "kasir"


class ItemType(str, Enum):
    """Tipo de ítem vendible."""
    PRODUCT = "product"    # Se vende por unidad, controla stock
    SERVICE = "service"    # Se vende por kilo, sin stock


class PaymentMethod(str, Enum):
    """Métodos de pago aceptados en caja."""
    CASH = "cash"
    QRIS = "qris"
    TRANSFER = "transfer"


class PaymentStatus(str, Enum):
    """Estado de pago de un pedido."""
    PAID = "paid"
    UNPAID = "unpaid"


class OrderProgress(str, Enum):
    """Ciclo de vida grueso de un pedido."""
    IN_PROGRESS = "in-progress"
    READY = "ready"
    COMPLETED = "completed"


class PromoStatus(str, Enum):
    """Estados de una promoción."""
    ACTIVE = "active"
    SCHEDULED = "scheduled"
    EXPIRED = "expired"
    DRAFT = "draft"


class AuditType(str, Enum):
    """Tipos de eventos de auditoría."""
    PEDIDO = "PEDIDO"
    PAGO = "PAGO"
    PROMO = "PROMO"
    CLIENTE = "CLIENTE"
    SISTEMA = "SISTEMA"


# Días de proceso de un servicio cuando el catálogo no lo indica (reguler)
DEFAULT_LEAD_TIME_DAYS = 3

# Paso mínimo de peso para servicios por kilo
WEIGHT_STEP = 0.5


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


# ==============================================================================
# ENTIDADES DE USUARIO
# ==============================================================================

@dataclass
class User:
    """
    Representa un usuario del panel de administración.

    Attributes:
        username: Identificador único del usuario
        password_hash: Hash de la contraseña (nunca almacenar en texto plano)
        role: Rol del usuario
    """
    username: str
    password_hash: str
    role: UserRole = UserRole.KASIR

    def is_admin(self) -> bool:
        """Verifica si el usuario tiene permisos de administrador."""
        return self.role == UserRole.ADMIN

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia."""
        return {
            'password': self.password_hash,
            'role': _enum_value(self.role)
        }

    @classmethod
    def from_dict(cls, username: str, data: Dict[str, Any]) -> 'User':
        """Crea instancia desde diccionario."""
        try:
            role = UserRole(data.get('role', 'kasir'))
        except ValueError:
            role = UserRole.KASIR
        return cls(
            username=username,
            password_hash=data.get('password', ''),
            role=role
        )


# ==============================================================================
# ENTIDADES DE CATÁLOGO
# ==============================================================================

@dataclass
class Variation:
    """
    Variación de un producto (ej: tamaño de botella).
    Cada variación tiene su propio SKU, precio y stock.
    """
    id: str
    name: str
    sku: str
    price: float = 0.0
    stock: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'sku': self.sku,
            'price': self.price,
            'stock': self.stock
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Variation':
        return cls(
            id=str(data.get('id', '')),
            name=data.get('name', ''),
            sku=data.get('sku', ''),
            price=float(data.get('price', 0) or 0),
            stock=int(data.get('stock', 0) or 0)
        )


@dataclass
class CatalogItem:
    """
    Producto o servicio vendible en caja.

    Si has_variations es True el precio y el stock viven en las variaciones;
    price y stock del ítem se ignoran.

    Attributes:
        id: Identificador único
        name: Nombre visible
        sku: Código SKU
        type: product o service
        price: Precio base (por unidad o por kilo)
        stock: Stock para productos sin variaciones
        category: Categoría (laundry, detergent, ...)
        description: Descripción libre
        has_variations: Si el ítem se vende por variación
        variations: Lista de variaciones
        status: active o inactive
        lead_time_days: Días de proceso (solo servicios: express=1, reguler=3)
        created_at: Fecha de creación
    """
    id: str
    name: str
    sku: str
    type: ItemType = ItemType.SERVICE
    price: float = 0.0
    stock: int = 0
    category: str = ''
    description: str = ''
    has_variations: bool = False
    variations: List[Variation] = field(default_factory=list)
    status: str = 'active'
    lead_time_days: Optional[int] = None
    created_at: str = ''

    @property
    def is_service(self) -> bool:
        return self.type == ItemType.SERVICE

    @property
    def is_active(self) -> bool:
        return self.status == 'active'

    @property
    def effective_lead_time(self) -> int:
        """Días de proceso del servicio (con valor por defecto)."""
        if self.lead_time_days is None:
            return DEFAULT_LEAD_TIME_DAYS
        return self.lead_time_days

    def get_variation(self, variation_id: Optional[str]) -> Optional[Variation]:
        """Busca una variación por su ID."""
        if variation_id is None:
            return None
        for v in self.variations:
            if v.id == str(variation_id):
                return v
        return None

    def available_stock(self, variation: Optional[Variation] = None) -> Optional[int]:
        """
        Stock disponible para venta.
        Retorna None para servicios (el stock no aplica).
        """
        if self.is_service:
            return None
        if variation is not None:
            return variation.stock
        return self.stock

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia JSON."""
        d = {
            'id': self.id,
            'name': self.name,
            'sku': self.sku,
            'type': _enum_value(self.type),
            'price': self.price,
            'stock': self.stock,
            'category': self.category,
            'description': self.description,
            'hasVariations': self.has_variations,
            'variations': [v.to_dict() for v in self.variations],
            'status': self.status,
            'createdAt': self.created_at
        }
        if self.lead_time_days is not None:
            d['leadTimeDays'] = self.lead_time_days
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CatalogItem':
        """Crea instancia desde diccionario (formato JSON del catálogo)."""
        variations = [Variation.from_dict(v) for v in data.get('variations', [])]
        lead = data.get('leadTimeDays', data.get('lead_time_days'))
        return cls(
            id=str(data.get('id', '')),
            name=data.get('name', ''),
            sku=data.get('sku', ''),
            type=ItemType(data.get('type', 'service')),
            price=float(data.get('price', 0) or 0),
            stock=int(data.get('stock', 0) or 0),
            category=data.get('category', ''),
            description=data.get('description', ''),
            has_variations=bool(data.get('hasVariations', data.get('has_variations', bool(variations)))),
            variations=variations,
            status=data.get('status', 'active'),
            lead_time_days=int(lead) if lead is not None else None,
            created_at=data.get('createdAt', data.get('created_at', ''))
        )


# ==============================================================================
# ENTIDADES DE PROMOCIÓN
# ==============================================================================

@dataclass
class PromoCode:
    """
    Regla de descuento identificada por un código.

    Los descuentos porcentuales se aplican sobre el subtotal antes de
    descuentos (con tope opcional max_discount). Los fijos son un monto
    absoluto en IDR.

    Attributes:
        id: Identificador único
        code: Código (se compara sin distinguir mayúsculas)
        discount_value: Porcentaje o monto fijo
        is_percentage: True si discount_value es un porcentaje
        title: Nombre de la promoción
        description: Descripción libre
        min_order: Subtotal mínimo para aplicar
        max_discount: Tope del descuento porcentual (opcional)
        start_date: Inicio de vigencia 'YYYY-MM-DD' (opcional)
        end_date: Fin de vigencia 'YYYY-MM-DD' inclusive (opcional)
        status: active, scheduled, expired, draft
        usage_count: Veces usada
        max_usage: Límite de usos (opcional)
        created_at: Fecha de creación
    """
    id: str
    code: str
    discount_value: float
    is_percentage: bool = True
    title: str = ''
    description: str = ''
    min_order: float = 0.0
    max_discount: Optional[float] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    status: PromoStatus = PromoStatus.ACTIVE
    usage_count: int = 0
    max_usage: Optional[int] = None
    created_at: str = ''

    @staticmethod
    def normalize_code(code: Optional[str]) -> str:
        """Clave de comparación de códigos."""
        return (code or '').strip().lower()

    def matches(self, code: Optional[str]) -> bool:
        """Verifica si el código ingresado corresponde a esta promo."""
        return self.normalize_code(self.code) == self.normalize_code(code)

    @property
    def usage_exhausted(self) -> bool:
        return self.max_usage is not None and self.usage_count >= self.max_usage

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia."""
        d = {
            'id': self.id,
            'code': self.code,
            'title': self.title,
            'description': self.description,
            'type': 'percentage' if self.is_percentage else 'fixed',
            'value': self.discount_value,
            'minOrder': self.min_order,
            'startDate': self.start_date,
            'endDate': self.end_date,
            'status': _enum_value(self.status),
            'usageCount': self.usage_count,
            'createdAt': self.created_at
        }
        if self.max_discount is not None:
            d['maxDiscount'] = self.max_discount
        if self.max_usage is not None:
            d['maxUsage'] = self.max_usage
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PromoCode':
        """Crea instancia desde diccionario (acepta formato de promoción)."""
        if 'is_percentage' in data:
            is_percentage = bool(data['is_percentage'])
        else:
            is_percentage = data.get('type', 'percentage') == 'percentage'
        value = data.get('value', data.get('discount_value', 0))
        max_discount = data.get('maxDiscount', data.get('max_discount'))
        max_usage = data.get('maxUsage', data.get('max_usage'))
        try:
            status = PromoStatus(data.get('status', 'active'))
        except ValueError:
            status = PromoStatus.DRAFT
        return cls(
            id=str(data.get('id', '')),
            code=data.get('code', ''),
            discount_value=float(value or 0),
            is_percentage=is_percentage,
            title=data.get('title', ''),
            description=data.get('description', ''),
            min_order=float(data.get('minOrder', data.get('min_order', 0)) or 0),
            max_discount=float(max_discount) if max_discount is not None else None,
            start_date=data.get('startDate', data.get('start_date')),
            end_date=data.get('endDate', data.get('end_date')),
            status=status,
            usage_count=int(data.get('usageCount', data.get('usage_count', 0)) or 0),
            max_usage=int(max_usage) if max_usage is not None else None,
            created_at=data.get('createdAt', data.get('created_at', ''))
        )


# ==============================================================================
# ENTIDADES DE CARRITO
# ==============================================================================

@dataclass
class CartLine:
    """
    Línea del carrito. Base común de ProductLine y ServiceLine.

    El subtotal siempre se calcula (unit_price × cantidad/peso),
    nunca se almacena.
    """
    id: str
    catalog_item_id: str
    name: str
    sku: str
    unit_price: float
    variation_id: Optional[str] = None
    variation_name: Optional[str] = None

    type = None  # type: Optional[ItemType]

    @property
    def quantity_or_weight(self) -> float:
        raise NotImplementedError

    @property
    def subtotal(self) -> float:
        return round(self.unit_price * self.quantity_or_weight, 2)

    def _base_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'type': _enum_value(self.type),
            'catalog_item_id': self.catalog_item_id,
            'name': self.name,
            'sku': self.sku,
            'unit_price': self.unit_price,
            'variation_id': self.variation_id,
            'variation_name': self.variation_name,
            'subtotal': self.subtotal
        }

    def to_dict(self) -> Dict[str, Any]:
        raise NotImplementedError

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'CartLine':
        """Reconstruye la línea según su tipo (product / service)."""
        common = dict(
            id=data.get('id', ''),
            catalog_item_id=str(data.get('catalog_item_id', '')),
            name=data.get('name', ''),
            sku=data.get('sku', ''),
            unit_price=float(data.get('unit_price', 0) or 0),
            variation_id=data.get('variation_id'),
            variation_name=data.get('variation_name')
        )
        if data.get('type') == ItemType.PRODUCT.value:
            return ProductLine(quantity=int(data.get('quantity', 1)), **common)
        return ServiceLine(
            weight=float(data.get('weight', 1.0)),
            lead_time_days=int(data.get('lead_time_days', DEFAULT_LEAD_TIME_DAYS)),
            **common
        )


@dataclass
class ProductLine(CartLine):
    """Línea de producto: cantidad entera >= 1."""
    quantity: int = 1

    type = ItemType.PRODUCT

    @property
    def quantity_or_weight(self) -> float:
        return self.quantity

    def to_dict(self) -> Dict[str, Any]:
        d = self._base_dict()
        d['quantity'] = self.quantity
        return d


@dataclass
class ServiceLine(CartLine):
    """Línea de servicio por kilo: peso >= 0.5 en pasos de 0.5."""
    weight: float = 1.0
    lead_time_days: int = DEFAULT_LEAD_TIME_DAYS

    type = ItemType.SERVICE

    @property
    def quantity_or_weight(self) -> float:
        return self.weight

    def to_dict(self) -> Dict[str, Any]:
        d = self._base_dict()
        d['weight'] = self.weight
        d['lead_time_days'] = self.lead_time_days
        return d


@dataclass
class Cart:
    """
    Carrito de la caja: líneas + promociones aplicadas.

    Es un objeto explícito que se pasa a los servicios; la capa HTTP lo
    guarda en la sesión con to_dict()/from_dict().
    """
    lines: List[CartLine] = field(default_factory=list)
    applied_promos: List[PromoCode] = field(default_factory=list)

    @property
    def subtotal(self) -> float:
        return round(sum(line.subtotal for line in self.lines), 2)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def get_line(self, line_id: str) -> Optional[CartLine]:
        for line in self.lines:
            if line.id == line_id:
                return line
        return None

    def find_promo(self, code_or_id: str) -> Optional[PromoCode]:
        for promo in self.applied_promos:
            if promo.matches(code_or_id) or promo.id == code_or_id:
                return promo
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para la sesión."""
        return {
            'lines': [line.to_dict() for line in self.lines],
            'applied_promos': [p.to_dict() for p in self.applied_promos]
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'Cart':
        """Crea instancia desde diccionario de sesión."""
        data = data or {}
        return cls(
            lines=[CartLine.from_dict(l) for l in data.get('lines', [])],
            applied_promos=[PromoCode.from_dict(p) for p in data.get('applied_promos', [])]
        )


# ==============================================================================
# ENTIDADES DE CLIENTE
# ==============================================================================

@dataclass
class Customer:
    """Cliente registrado de la lavandería."""
    id: str
    name: str
    phone: Optional[str] = None
    total_orders: int = 0
    total_spent: float = 0.0
    last_order_date: Optional[str] = None
    created_at: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'phone': self.phone,
            'totalOrders': self.total_orders,
            'totalSpent': self.total_spent,
            'lastOrderDate': self.last_order_date,
            'createdAt': self.created_at
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Customer':
        return cls(
            id=str(data.get('id', '')),
            name=data.get('name', ''),
            phone=data.get('phone'),
            total_orders=int(data.get('totalOrders', 0) or 0),
            total_spent=float(data.get('totalSpent', 0) or 0),
            last_order_date=data.get('lastOrderDate'),
            created_at=data.get('createdAt', '')
        )


@dataclass(frozen=True)
class CustomerRef:
    """Datos del cliente copiados en el pedido."""
    name: str
    phone: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_customer(cls, customer: Customer) -> 'CustomerRef':
        return cls(name=customer.name, phone=customer.phone, id=customer.id)

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'name': self.name, 'phone': self.phone}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CustomerRef':
        return cls(name=data.get('name', ''), phone=data.get('phone'), id=data.get('id'))


# ==============================================================================
# ENTIDADES DE ESTADO DE PEDIDO
# ==============================================================================

@dataclass
class OrderStatus:
    """
    Estado configurable de un pedido (Pesanan Diterima, Sedang Dicuci, ...).

    Attributes:
        id: Identificador
        name: Nombre visible
        description: Descripción
        icon: Emoji para la interfaz
        order: Posición en el flujo (1 = inicial)
        is_active: Si puede asignarse
        is_default: Estado de sistema (no se elimina)
        progress: Fase del ciclo de vida que representa (opcional)
    """
    id: str
    name: str
    description: str = ''
    icon: str = ''
    order: int = 0
    is_active: bool = True
    is_default: bool = False
    progress: Optional[OrderProgress] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'icon': self.icon,
            'order': self.order,
            'isActive': self.is_active,
            'isDefault': self.is_default,
            'progress': _enum_value(self.progress)
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OrderStatus':
        progress = data.get('progress')
        return cls(
            id=str(data.get('id', '')),
            name=data.get('name', ''),
            description=data.get('description', ''),
            icon=data.get('icon', ''),
            order=int(data.get('order', 0) or 0),
            is_active=bool(data.get('isActive', True)),
            is_default=bool(data.get('isDefault', False)),
            progress=OrderProgress(progress) if progress else None
        )


# ==============================================================================
# ENTIDADES DE PEDIDO
# ==============================================================================

@dataclass(frozen=True)
class Order:
    """
    Pedido confirmado en caja. Foto inmutable del carrito al confirmar.

    Los cambios de estado posteriores crean una copia con
    dataclasses.replace() y se persisten aparte.
    """
    invoice: str
    date_in: str
    estimated_done: str
    lines: Tuple[CartLine, ...]
    promos: Tuple[PromoCode, ...]
    subtotal: float
    discount: float
    total: float
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    order_status_id: str
    customer: Optional[CustomerRef] = None
    is_quick_purchase: bool = False
    progress: OrderProgress = OrderProgress.IN_PROGRESS
    notes: str = ''
    print_receipt: bool = False
    created_by: str = ''
    created_at: str = ''

    @property
    def total_weight(self) -> float:
        """Kilos totales de servicios del pedido."""
        return round(sum(l.weight for l in self.lines if isinstance(l, ServiceLine)), 2)

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia JSON."""
        return {
            'invoice': self.invoice,
            'dateIn': self.date_in,
            'estimatedDone': self.estimated_done,
            'customer': self.customer.to_dict() if self.customer else None,
            'isQuickPurchase': self.is_quick_purchase,
            'items': [l.to_dict() for l in self.lines],
            'promos': [p.to_dict() for p in self.promos],
            'subtotal': self.subtotal,
            'discount': self.discount,
            'total': self.total,
            'paymentMethod': _enum_value(self.payment_method),
            'paymentStatus': _enum_value(self.payment_status),
            'status': self.order_status_id,
            'progress': _enum_value(self.progress),
            'notes': self.notes,
            'printReceipt': self.print_receipt,
            'createdBy': self.created_by,
            'createdAt': self.created_at
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Order':
        """Crea instancia desde diccionario (formato orders.json)."""
        customer = data.get('customer')
        return cls(
            invoice=data.get('invoice', ''),
            date_in=data.get('dateIn', ''),
            estimated_done=data.get('estimatedDone', ''),
            lines=tuple(CartLine.from_dict(l) for l in data.get('items', [])),
            promos=tuple(PromoCode.from_dict(p) for p in data.get('promos', [])),
            subtotal=float(data.get('subtotal', 0) or 0),
            discount=float(data.get('discount', 0) or 0),
            total=float(data.get('total', 0) or 0),
            payment_method=PaymentMethod(data.get('paymentMethod', 'cash')),
            payment_status=PaymentStatus(data.get('paymentStatus', 'unpaid')),
            order_status_id=str(data.get('status', '')),
            customer=CustomerRef.from_dict(customer) if customer else None,
            is_quick_purchase=bool(data.get('isQuickPurchase', False)),
            progress=OrderProgress(data.get('progress', 'in-progress')),
            notes=data.get('notes', ''),
            print_receipt=bool(data.get('printReceipt', False)),
            created_by=data.get('createdBy', ''),
            created_at=data.get('createdAt', '')
        )


# ==============================================================================
# ENTIDADES DE AUDITORÍA
# ==============================================================================

@dataclass
class AuditLog:
    """
    Registro de auditoría.

    Attributes:
        type: Tipo de evento (PEDIDO, PAGO, PROMO, etc.)
        user: Usuario que realizó la acción
        message: Mensaje descriptivo humanizado
        timestamp: Fecha y hora del evento
        related_id: ID relacionado (invoice, código de promo, etc.)
        details: Detalles adicionales
    """
    type: str
    user: str
    message: str
    timestamp: str = ''
    related_id: str = ''
    details: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia."""
        return {
            'type': self.type,
            'user': self.user,
            'message': self.message,
            'timestamp': self.timestamp,
            'related_id': self.related_id,
            'details': self.details
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AuditLog':
        """Crea instancia desde diccionario."""
        return cls(
            type=data.get('type', ''),
            user=data.get('user', ''),
            message=data.get('message', ''),
            timestamp=data.get('timestamp', ''),
            related_id=data.get('related_id', ''),
            details=data.get('details', {})
        )
