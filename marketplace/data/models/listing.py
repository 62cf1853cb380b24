from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text, func

from marketplace.data.database import Base


class ListingModel(Base):
    __tablename__ = "listings"

    id = Column(Integer, primary_key=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    condition = Column(String(50), nullable=False, default="used")
    price = Column(Numeric(10, 2), nullable=False)

    # reference into external image storage, never the bytes
    photo = Column(String(512), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
