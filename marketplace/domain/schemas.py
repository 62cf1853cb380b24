# marketplace/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr
from typing import List
from decimal import Decimal
from datetime import datetime


class Identity(BaseModel):
    """Verified caller, resolved from a bearer credential."""

    id: int
    username: str
    is_admin: bool = False

    model_config = ConfigDict(frozen=True)


class MessageOut(BaseModel):
    message: str


# users

class RegisterIn(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=100)
    surname: str = Field(..., min_length=1, max_length=100)


class LoginIn(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserRead(BaseModel):
    """User as shown to its owner, never carries the password hash."""

    id: int
    username: str
    email: str
    name: str
    surname: str
    age: int | None = None
    bio: str | None = None
    profile_picture: str | None = None
    role: str
    is_admin: bool

    model_config = ConfigDict(from_attributes=True)


class LoginOut(BaseModel):
    message: str
    user: UserRead
    access_token: str
    token_type: str = "bearer"


class ProfileUpdate(BaseModel):
    email: EmailStr | None = None
    name: str | None = Field(None, min_length=1, max_length=100)
    surname: str | None = Field(None, min_length=1, max_length=100)
    age: int | None = Field(None, ge=0, le=150)
    bio: str | None = None
    profile_picture: str | None = None


# listings

class ListingCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    condition: str = Field("used", min_length=1, max_length=50)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    photo: str | None = None


class ListingUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    condition: str | None = Field(None, min_length=1, max_length=50)
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    photo: str | None = None


class ListingOut(BaseModel):
    id: int
    owner_id: int
    name: str
    description: str | None = None
    condition: str
    price: Decimal
    photo: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


# cart

class CartAddIn(BaseModel):
    """Body of POST /cart/add."""

    product_id: int = Field(..., gt=0, description="Listing id")
    # range is checked by the cart service so that it reports InvalidQuantity
    quantity: int = Field(1, strict=True, description="Positive number of units")


class CartItemOut(BaseModel):
    cart_item_id: int
    product_id: int
    quantity: int
    listing_name: str
    price: Decimal
    photo: str | None = None


class CartOut(BaseModel):
    cart_id: int
    items: List[CartItemOut]


# orders

class CheckoutIn(BaseModel):
    # presence is checked by the order service before any store access
    address: str | None = None
    payment_method: str | None = None


class CheckoutOut(BaseModel):
    order_id: int
    order_amount: Decimal
    shipping_cost: Decimal
    payment_method: str


class OrderOut(BaseModel):
    id: int
    user_id: int
    address: str
    payment_method: str
    status: str
    amount: Decimal
    shipping_cost: Decimal
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# comments, wishlist, reports

class CommentIn(BaseModel):
    content: str = Field(..., min_length=1)


class CommentOut(BaseModel):
    id: int
    user_id: int
    listing_id: int
    username: str
    content: str
    created_at: datetime | None = None


class WishlistIn(BaseModel):
    product_id: int = Field(..., gt=0)


class WishlistItemOut(BaseModel):
    product_id: int
    listing_name: str
    price: Decimal
    photo: str | None = None


class ReportIn(BaseModel):
    reason: str = Field(..., min_length=1)


class ReportOut(BaseModel):
    id: int
    user_id: int
    comment_id: int
    reason: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
