from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ird_properties.core.database import Base
import enum


class RequestStatus(str, enum.Enum):
    PENDING = "pending"      # Submitted by requester, nothing reserved yet
    APPROVED = "approved"    # Approved in full, requested quantity reserved
    ADJUSTED = "adjusted"    # Approved for a smaller quantity, that quantity reserved
    REJECTED = "rejected"    # Terminal, nothing reserved
    ISSUED = "issued"        # Terminal, issuance record exists


class PropertyRequest(Base):
    """
    One allocation request from one requester against one property.
    Requester and property fields are copied at creation time so the
    request survives later edits to either.
    """
    __tablename__ = "property_requests"
    __table_args__ = (
        CheckConstraint("requested_quantity > 0", name="ck_requests_requested_positive"),
        CheckConstraint(
            "approved_quantity IS NULL OR (approved_quantity > 0 AND approved_quantity <= requested_quantity)",
            name="ck_requests_approved_in_range",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)

    # Requester (denormalized)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    user_name = Column(String(255), nullable=False)
    user_department = Column(String(255), nullable=False)

    # Property (denormalized)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=True, index=True)
    property_number = Column(String(100), nullable=False)
    property_name = Column(String(255), nullable=False)
    quantity_type = Column(String(50), nullable=False)

    requested_quantity = Column(Integer, nullable=False)
    approved_quantity = Column(Integer, nullable=True)

    status = Column(String(20), default=RequestStatus.PENDING.value, nullable=False, index=True)
    reason = Column(Text, nullable=True)  # Rejection / adjustment notes

    # Workflow tracking
    admin_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    store_manager_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    issued_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    issuance = relationship("Issuance", back_populates="request", uselist=False)

    @property
    def final_quantity(self) -> int:
        """Quantity reserved for this request (approved if set, otherwise requested)"""
        return self.approved_quantity if self.approved_quantity is not None else self.requested_quantity
