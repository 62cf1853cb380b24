# marketplace/services/cart_service.py
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from marketplace.data.database import transaction
from marketplace.data.models.cart import CartModel
from marketplace.domain.errors import Conflict, InvalidQuantity, NotFound, StorageError
from marketplace.repos.cart_repo import CartRepo
from marketplace.repos.listing_repo import ListingRepo
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

CREATED = "created"
MERGED = "merged"

# upper bound for one cart line, also after merging
MAX_QUANTITY = 10_000


def validate_quantity(quantity: Any) -> int:
    # bool is an int subclass, True must not sneak in as 1
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidQuantity("Quantity must be a positive integer")
    if quantity > MAX_QUANTITY:
        raise InvalidQuantity(f"Quantity must not exceed {MAX_QUANTITY}")
    return quantity


class CartService:
    """
    Per-user cart: lazy creation, add with merge, owned removal, listing.
    Every coordination rule lives in the store (unique constraints and
    conditional statements), no in-process locks.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = CartRepo(db)
        self.listings = ListingRepo(db)

    def get_or_create_cart(self, user_id: int) -> CartModel:
        cart = self.repo.get_cart_by_user(user_id)
        if cart:
            return cart

        try:
            with transaction(self.db):
                cart = self.repo.create_cart(user_id)
            logger.info(f"Created cart {cart.id} for user {user_id}")
            return cart
        except Conflict:
            # a concurrent request created it first, carts.user_id is unique
            cart = self.repo.get_cart_by_user(user_id)
            if cart is None:
                raise StorageError("Could not create cart")
            return cart

    def add_item(self, user_id: int, listing_id: int, quantity: int = 1) -> str:
        """
        Adds `quantity` units of a listing. A second add of the same listing
        increments the existing row, so there is never more than one row per
        (cart, listing). Returns CREATED or MERGED.
        """
        validate_quantity(quantity)

        if self.listings.get_listing(listing_id) is None:
            raise NotFound("Listing not found")

        cart = self.get_or_create_cart(user_id)

        try:
            with transaction(self.db):
                if self.repo.increment_item(cart.id, listing_id, quantity, limit=MAX_QUANTITY):
                    outcome = MERGED
                elif self.repo.get_item(cart.id, listing_id) is not None:
                    raise InvalidQuantity(f"Quantity in cart must not exceed {MAX_QUANTITY}")
                else:
                    self.repo.add_item(cart.id, listing_id, quantity)
                    outcome = CREATED
        except Conflict:
            # lost the insert race on u_cart_listing, the row is there now
            logger.info(f"Concurrent add for listing {listing_id} in cart {cart.id}, merging")
            with transaction(self.db):
                if not self.repo.increment_item(cart.id, listing_id, quantity, limit=MAX_QUANTITY):
                    if self.repo.get_item(cart.id, listing_id) is not None:
                        raise InvalidQuantity(f"Quantity in cart must not exceed {MAX_QUANTITY}")
                    raise StorageError("Could not add item to cart")
            outcome = MERGED

        logger.info(f"Listing {listing_id} x{quantity} {outcome} in cart {cart.id}")
        return outcome

    def remove_item(self, user_id: int, cart_item_id: int) -> None:
        with transaction(self.db):
            deleted = self.repo.delete_owned_item(user_id, cart_item_id)
            if not deleted:
                raise NotFound("Cart item not found")

        logger.info(f"Removed cart item {cart_item_id} for user {user_id}")

    def list_items(self, user_id: int) -> List[Dict[str, Any]]:
        cart = self.repo.get_cart_by_user(user_id)
        if cart is None:
            return []
        return [dict(row._mapping) for row in self.repo.get_items_with_listing(cart.id)]

    def get_cart(self, user_id: int) -> Dict[str, Any]:
        cart = self.get_or_create_cart(user_id)
        items = self.repo.get_items_with_listing(cart.id)
        return {
            "cart_id": cart.id,
            "items": [dict(row._mapping) for row in items],
        }
