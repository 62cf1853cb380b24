# marketplace/services/order_service.py
from decimal import Decimal
from typing import Any, Dict, List

from redis.exceptions import RedisError
from sqlalchemy.orm import Session

from marketplace.data.database import transaction
from marketplace.data.models.order import OrderModel
from marketplace.domain.errors import Conflict, EmptyCart, InvalidInput, NotFoundOrForbidden, StorageError
from marketplace.domain.schemas import Identity
from marketplace.repos.cart_repo import CartRepo
from marketplace.repos.order_repo import OrderRepo
from marketplace.services.auth_service import owner_or_admin
from marketplace.services.lock_service import LockService
from marketplace.services.notification_service import NotificationService
from marketplace.utils.settings import CHECKOUT_LOCK_TTL_SECONDS, SHIPPING_COST
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

CENT = Decimal("0.01")
# orders.amount is Numeric(10, 2)
MAX_ORDER_AMOUNT = Decimal("99999999.99")


def _order_dict(order: OrderModel) -> Dict[str, Any]:
    return {
        "id": order.id,
        "user_id": order.user_id,
        "address": order.address,
        "payment_method": order.payment_method,
        "status": order.status,
        "amount": order.amount,
        "shipping_cost": order.shipping_cost,
        "created_at": order.created_at,
    }


class OrderService:
    """
    Checkout turns the caller's cart into an order.

    Order insert and cart clear run in one transaction: either both happen
    or neither does. A Redis lock per user rejects a second checkout while
    the first is still running, and the cart row is locked for update inside
    the transaction.
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService | None = None,
        notification_service: NotificationService | None = None,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.lock_service = lock_service
        self.notification_service = notification_service or NotificationService()

    def checkout(self, user_id: int, address: str | None, payment_method: str | None) -> Dict[str, Any]:
        """
        1. address and payment method present
        2. cart items priced at the listings' current price
        3. amount = items total + flat shipping
        4. insert order, clear cart, commit
        5. queue the notification
        """
        address = (address or "").strip()
        payment_method = (payment_method or "").strip()
        if not address or not payment_method:
            raise InvalidInput("Address and payment method are required")

        if self.lock_service is None:
            self.lock_service = LockService()

        try:
            token = self.lock_service.acquire_checkout_lock(user_id, ttl=CHECKOUT_LOCK_TTL_SECONDS)
        except RedisError as e:
            logger.error(f"Checkout lock unavailable for user {user_id}: {e}")
            raise StorageError("Checkout is temporarily unavailable") from e

        if token is None:
            raise Conflict("Checkout already in progress")

        try:
            with transaction(self.db):
                cart = self.cart_repo.lock_cart_by_user(user_id)
                lines = self.cart_repo.get_items_with_listing(cart.id) if cart else []
                if not lines:
                    raise EmptyCart("Cart is empty")

                # no price snapshot at add time, the listing price right now counts
                items_total = sum((line.price * line.quantity for line in lines), Decimal("0.00"))
                amount = (items_total + SHIPPING_COST).quantize(CENT)
                if amount > MAX_ORDER_AMOUNT:
                    raise InvalidInput("Order total exceeds the maximum amount")

                order = self.repo.create_order(
                    OrderModel(
                        user_id=user_id,
                        address=address,
                        payment_method=payment_method,
                        status="processing",
                        amount=amount,
                        shipping_cost=SHIPPING_COST,
                    )
                )
                cleared = self.cart_repo.clear_items(cart.id)
                order_id = order.id
        finally:
            self._release(user_id, token)

        logger.info(
            f"Order {order_id} placed by user {user_id}: amount {amount}, "
            f"{cleared} cart item(s) cleared"
        )

        self.notification_service.send_order_notification(user_id, order_id)

        return {
            "order_id": order_id,
            "order_amount": amount,
            "shipping_cost": SHIPPING_COST,
            "payment_method": payment_method,
        }

    def _release(self, user_id: int, token: str) -> None:
        try:
            self.lock_service.release_checkout_lock(user_id, token)
        except RedisError as e:
            # the TTL frees it anyway
            logger.warning(f"Failed to release checkout lock for user {user_id}: {e}")

    def get_order(self, identity: Identity, order_id: int) -> Dict[str, Any]:
        order = self.repo.get_order(order_id)

        if order is None or not owner_or_admin(identity, order.user_id):
            raise NotFoundOrForbidden("Order not found")

        return _order_dict(order)

    def list_orders(self, user_id: int) -> List[Dict[str, Any]]:
        return [_order_dict(o) for o in self.repo.list_orders_by_user(user_id)]
