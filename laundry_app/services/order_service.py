# ==============================================================================
# SERVICIO DE PEDIDOS
# ==============================================================================
# Convierte un carrito finalizado + cliente + pago en un pedido inmutable,
# y gestiona el ciclo de vida posterior (estado de proceso y de pago).
# ==============================================================================

import copy
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Union

from laundry_app.models import (
    Cart,
    Customer,
    CustomerRef,
    Order,
    OrderProgress,
    PaymentMethod,
    PaymentStatus,
    ServiceLine,
)
from laundry_app.repositories.interfaces import IOrderRepository
from laundry_app.services.audit_service import AuditService
from laundry_app.services.customer_service import CustomerService
from laundry_app.services.discount_service import DiscountService
from laundry_app.services.errors import (
    EmptyCart,
    InvalidLookupTerm,
    InvalidPaymentOption,
    MissingCustomer,
    OrderNotFound,
)
from laundry_app.services.invoice_service import InvoiceNumberGenerator
from laundry_app.services.order_status_service import OrderStatusService
from laundry_app.services.promo_service import PromoService


DATE_FORMAT = '%Y-%m-%d'

# Largo mínimo del término de búsqueda pública
MIN_LOOKUP_LENGTH = 5


class OrderService:
    """
    Servicio de pedidos.

    Responsabilidades:
    - Armar el pedido desde el carrito (create_order, sin efectos)
    - Confirmar: persistir, contar usos de promos, estadísticas del
      cliente y auditoría (submit_order)
    - Consulta pública por factura o teléfono
    - Cambios de estado y registro de pago
    """

    def __init__(
        self,
        order_repo: IOrderRepository,
        status_service: OrderStatusService,
        discount_service: DiscountService,
        invoice_generator: InvoiceNumberGenerator,
        promo_service: PromoService = None,
        customer_service: CustomerService = None,
        audit_service: AuditService = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.order_repo = order_repo
        self.status_service = status_service
        self.discount_service = discount_service
        self.invoice_generator = invoice_generator
        self.promo_service = promo_service
        self.customer_service = customer_service
        self.audit_service = audit_service
        self.clock = clock

    # =========================================================================
    # CREACIÓN DE PEDIDOS
    # =========================================================================

    def create_order(
        self,
        cart: Cart,
        customer: Optional[Union[Customer, CustomerRef]],
        payment_method: Union[str, PaymentMethod],
        payment_status: Union[str, PaymentStatus],
        order_status_id: Optional[str] = None,
        notes: str = '',
        print_receipt: bool = False,
        quick_purchase: bool = False,
        user: str = None
    ) -> Order:
        """
        Arma el pedido a partir del carrito.

        Todas las validaciones ocurren antes de generar la factura: si
        falla, el contador no avanza. No modifica el carrito; el llamador
        debe limpiarlo tras el éxito.

        Raises:
            EmptyCart, MissingCustomer, InvalidPaymentOption, InvalidOrderStatus,
            PromoNotApplicable, UnknownCode, PromoLookupUnavailable
        """
        fields = self._prepare(
            cart, customer, payment_method, payment_status,
            order_status_id, notes, print_receipt, quick_purchase, user
        )
        return Order(invoice=self.invoice_generator.next_invoice(), **fields)

    def _prepare(self, cart, customer, payment_method, payment_status,
                 order_status_id, notes, print_receipt, quick_purchase, user) -> Dict[str, Any]:
        """Valida y arma los campos del pedido, sin factura."""
        if cart.is_empty:
            raise EmptyCart()

        if quick_purchase:
            customer_ref = None
        elif customer is None:
            raise MissingCustomer()
        elif isinstance(customer, Customer):
            customer_ref = CustomerRef.from_customer(customer)
        else:
            customer_ref = customer

        try:
            method = PaymentMethod(payment_method)
            pay_status = PaymentStatus(payment_status)
        except ValueError:
            raise InvalidPaymentOption(payment_method=str(payment_method),
                                       payment_status=str(payment_status))

        status = self.status_service.resolve_active(order_status_id)

        now = self.clock()
        totals = self.discount_service.calculate_cart(cart)

        # el carrito pudo cambiar desde que se aplicaron las promos
        if self.promo_service:
            self.promo_service.revalidate(cart.applied_promos, totals['subtotal'], now.date())
        else:
            for promo in cart.applied_promos:
                PromoService.check_applicable(promo, totals['subtotal'], now.date())

        return dict(
            date_in=now.strftime(DATE_FORMAT),
            estimated_done=self.estimate_done(cart, now),
            lines=tuple(copy.deepcopy(l) for l in cart.lines),
            promos=tuple(copy.deepcopy(p) for p in cart.applied_promos),
            subtotal=totals['subtotal'],
            discount=totals['discount'],
            total=totals['total'],
            payment_method=method,
            payment_status=pay_status,
            order_status_id=status.id,
            customer=customer_ref,
            is_quick_purchase=quick_purchase,
            progress=status.progress or OrderProgress.IN_PROGRESS,
            notes=str(notes or '').strip(),
            print_receipt=bool(print_receipt),
            created_by=user or '',
            created_at=now.strftime('%Y-%m-%d %H:%M:%S')
        )

    @staticmethod
    def estimate_done(cart: Cart, date_in: datetime) -> str:
        """
        Fecha estimada de entrega: fecha de ingreso + el mayor tiempo de
        proceso entre los servicios. Solo productos = mismo día.
        """
        lead_times = [l.lead_time_days for l in cart.lines if isinstance(l, ServiceLine)]
        days = max(lead_times) if lead_times else 0
        return (date_in + timedelta(days=days)).strftime(DATE_FORMAT)

    def submit_order(self, cart: Cart, customer, payment_method, payment_status,
                     order_status_id=None, notes='', print_receipt=False,
                     quick_purchase=False, user=None, register_customer=False) -> Order:
        """
        Crea y confirma el pedido: reserva usos de promociones, persiste,
        actualiza estadísticas del cliente y audita.

        Con register_customer=True, `customer` es un CustomerRef sin ID que
        se da de alta solo si el pedido pasó todas las validaciones.

        Si algo falla después de reservar usos, las reservas se liberan.
        """
        fields = self._prepare(
            cart, customer, payment_method, payment_status,
            order_status_id, notes, print_receipt, quick_purchase, user
        )

        reserved = []
        if self.promo_service and fields['promos']:
            reserved = self.promo_service.reserve_usage(fields['promos'])

        try:
            new_ref = fields['customer']
            if register_customer and self.customer_service and new_ref and not new_ref.id:
                created = self.customer_service.create_customer(new_ref.name, new_ref.phone, user)
                fields['customer'] = CustomerRef.from_customer(created)

            order = Order(invoice=self.invoice_generator.next_invoice(), **fields)
            self.order_repo.save_order(order)
        except Exception:
            if reserved:
                self.promo_service.release_usage(reserved)
            raise

        if self.promo_service and order.promos:
            self.promo_service.log_usage(order.promos, order.invoice, user)

        if self.customer_service and order.customer and order.customer.id:
            self.customer_service.record_order(order.customer.id, order.total, order.date_in)

        if self.audit_service:
            self.audit_service.log_order_created(user, order)

        return order

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def list_orders(self, status_id: str = None, search: str = None) -> List[Order]:
        orders = self.order_repo.list_orders()
        if status_id:
            orders = [o for o in orders if o.order_status_id == str(status_id)]
        if search:
            term = search.strip().lower()
            orders = [
                o for o in orders
                if term in o.invoice.lower()
                or (o.customer and term in o.customer.name.lower())
                or (o.customer and term in (o.customer.phone or ''))
            ]
        return orders

    def get_order(self, invoice: str) -> Order:
        order = self.order_repo.get_by_invoice(invoice)
        if order is None:
            raise OrderNotFound(invoice=invoice)
        return order

    def lookup_orders(self, term: str) -> List[Dict[str, Any]]:
        """
        Consulta pública de estado (por factura o teléfono).

        Coincide si la factura contiene el término (sin mayúsculas) o si el
        teléfono del cliente es igual. Solo retorna datos no sensibles.

        Raises:
            InvalidLookupTerm: término con menos de 5 caracteres
        """
        term = (term or '').strip()
        if len(term) < MIN_LOOKUP_LENGTH:
            raise InvalidLookupTerm(term=term)

        term_lower = term.lower()
        status_names = {s.id: s.name for s in self.status_service.list_statuses()}

        results = []
        for order in self.order_repo.list_orders():
            phone = order.customer.phone if order.customer else None
            if term_lower in order.invoice.lower() or (phone and phone == term):
                results.append({
                    'invoice': order.invoice,
                    'customerName': order.customer.name if order.customer else 'Pelanggan Umum',
                    'dateIn': order.date_in,
                    'estimatedDone': order.estimated_done,
                    'totalWeight': order.total_weight,
                    'status': status_names.get(order.order_status_id, order.order_status_id),
                    'progress': order.progress.value
                })
        return results

    # =========================================================================
    # CICLO DE VIDA
    # =========================================================================

    def update_status(self, invoice: str, status_id: str, user: str = None) -> Order:
        """
        Cambia el estado de proceso de un pedido.

        Raises:
            OrderNotFound, InvalidOrderStatus
        """
        order = self.get_order(invoice)
        status = self.status_service.resolve_active(status_id)
        if status.id == order.order_status_id:
            return order

        old_status = self.status_service.get_status(order.order_status_id)
        updated = replace(
            order,
            order_status_id=status.id,
            progress=status.progress or order.progress
        )
        self.order_repo.replace_order(updated)

        if self.audit_service:
            self.audit_service.log_status_change(
                user,
                invoice,
                old_status.name if old_status else order.order_status_id,
                status.name
            )
        return updated

    def mark_paid(self, invoice: str, user: str = None) -> Order:
        """
        Registra el pago de un pedido pendiente. Si ya estaba pagado
        no hace nada.

        Raises:
            OrderNotFound
        """
        order = self.get_order(invoice)
        if order.is_paid:
            return order

        updated = replace(order, payment_status=PaymentStatus.PAID)
        self.order_repo.replace_order(updated)

        if self.audit_service:
            self.audit_service.log_payment(user, invoice, order.total, order.payment_method.value)
        return updated
