#every model imported here so Base.metadata knows all tables

from marketplace.data.models.user import UserModel
from marketplace.data.models.listing import ListingModel
from marketplace.data.models.cart import CartModel
from marketplace.data.models.cart_item import CartItemModel
from marketplace.data.models.order import OrderModel
from marketplace.data.models.comment import CommentModel
from marketplace.data.models.wishlist import WishlistModel
from marketplace.data.models.report import ReportModel

__all__ = [
    "UserModel",
    "ListingModel",
    "CartModel",
    "CartItemModel",
    "OrderModel",
    "CommentModel",
    "WishlistModel",
    "ReportModel",
]
