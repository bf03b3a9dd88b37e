from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from ird_properties.core.database import Base


class Issuance(Base):
    """
    Permanent record that stock physically left the store.
    Exactly one per issued request; never updated or deleted.
    """
    __tablename__ = "issuances"

    id = Column(Integer, primary_key=True, index=True)
    request_id = Column(Integer, ForeignKey("property_requests.id"), unique=True, nullable=False)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=True, index=True)

    # Requester snapshot
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    user_name = Column(String(255), nullable=False)
    user_department = Column(String(255), nullable=False)

    # Property snapshot at issuance time
    property_number = Column(String(100), nullable=False)
    property_name = Column(String(255), nullable=False)
    model_number = Column(String(255), nullable=False)
    model_19_number = Column(String(255), nullable=True)
    model_22_number = Column(String(255), nullable=True)  # Supplied by the issuer
    serial_number = Column(String(255), nullable=False)
    quantity_type = Column(String(50), nullable=False)
    property_type = Column(String(50), nullable=False)
    is_permanent = Column(Boolean, nullable=False)

    issued_quantity = Column(Integer, nullable=False)
    issued_at = Column(DateTime(timezone=True), nullable=False)

    store_manager_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    store_manager_name = Column(String(255), nullable=False)

    # Relationships
    request = relationship("PropertyRequest", back_populates="issuance")
