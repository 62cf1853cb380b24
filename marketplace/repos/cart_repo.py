# marketplace/repos/cart_repo.py
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session

from marketplace.data.models.cart import CartModel
from marketplace.data.models.cart_item import CartItemModel
from marketplace.data.models.listing import ListingModel


class CartRepo:
    """
    Queries over carts and cart items. Never commits, the caller owns the
    transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_cart_by_user(self, user_id: int) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.user_id == user_id)
        ).scalar_one_or_none()

    def lock_cart_by_user(self, user_id: int) -> CartModel | None:
        # FOR UPDATE where the dialect has it, sqlite serializes writers anyway
        return self.db.execute(
            select(CartModel).where(CartModel.user_id == user_id).with_for_update()
        ).scalar_one_or_none()

    def create_cart(self, user_id: int) -> CartModel:
        cart = CartModel(user_id=user_id)
        self.db.add(cart)
        self.db.flush()
        return cart

    def get_item(self, cart_id: int, listing_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.listing_id == listing_id,
            )
        ).scalar_one_or_none()

    def increment_item(self, cart_id: int, listing_id: int, quantity: int, limit: int | None = None) -> int:
        # UPDATE cart_items SET quantity = quantity + :q
        # WHERE cart_id = :c AND listing_id = :l AND quantity <= :limit - :q
        stmt = update(CartItemModel).where(
            CartItemModel.cart_id == cart_id,
            CartItemModel.listing_id == listing_id,
        )
        if limit is not None:
            stmt = stmt.where(CartItemModel.quantity <= limit - quantity)
        result = self.db.execute(
            stmt
            .values(quantity=CartItemModel.quantity + quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def add_item(self, cart_id: int, listing_id: int, quantity: int) -> CartItemModel:
        item = CartItemModel(cart_id=cart_id, listing_id=listing_id, quantity=quantity)
        self.db.add(item)
        self.db.flush()
        return item

    def delete_owned_item(self, user_id: int, cart_item_id: int) -> int:
        # ownership by join, a guessed id from another cart matches nothing
        owned_carts = select(CartModel.id).where(CartModel.user_id == user_id)
        result = self.db.execute(
            delete(CartItemModel)
            .where(
                CartItemModel.id == cart_item_id,
                CartItemModel.cart_id.in_(owned_carts),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def get_items_with_listing(self, cart_id: int) -> List[Row]:
        return self.db.execute(
            select(
                CartItemModel.id.label("cart_item_id"),
                CartItemModel.listing_id.label("product_id"),
                CartItemModel.quantity,
                ListingModel.name.label("listing_name"),
                ListingModel.price,
                ListingModel.photo,
            )
            .join(ListingModel, ListingModel.id == CartItemModel.listing_id)
            .where(CartItemModel.cart_id == cart_id)
            .order_by(CartItemModel.id)
        ).all()

    def clear_items(self, cart_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
