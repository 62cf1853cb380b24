from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint, func

from marketplace.data.database import Base


class WishlistModel(Base):
    __tablename__ = "wishlist"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    listing_id = Column(Integer, ForeignKey("listings.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (UniqueConstraint("user_id", "listing_id", name="u_wishlist_user_listing"),)
