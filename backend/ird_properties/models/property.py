from sqlalchemy import Column, Integer, String, DateTime, Float, CheckConstraint
from sqlalchemy.sql import func
from ird_properties.core.database import Base
import enum


class PropertyType(str, enum.Enum):
    PERMANENT = "permanent"
    TEMPORARY = "temporary"
    PERMANENT_TEMPORARY = "permanent-temporary"

    @property
    def is_permanent(self) -> bool:
        """Permanent and permanent-temporary items are tracked as permanent issuances"""
        return self in (PropertyType.PERMANENT, PropertyType.PERMANENT_TEMPORARY)


class Property(Base):
    """
    Catalog item owned by the institution.
    available_quantity is only ever written by the InventoryLedger.
    """
    __tablename__ = "properties"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_properties_quantity_non_negative"),
        CheckConstraint("available_quantity >= 0", name="ck_properties_available_non_negative"),
        CheckConstraint("available_quantity <= quantity", name="ck_properties_available_within_total"),
    )

    id = Column(Integer, primary_key=True, index=True)
    number = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False, index=True)
    model_number = Column(String(255), nullable=False)
    model_19_number = Column(String(255), nullable=True)
    serial_number = Column(String(255), nullable=False)
    date = Column(String(50), nullable=False)  # Registration date as entered
    company_name = Column(String(255), nullable=False)
    measurement = Column(String(50), nullable=False)  # Unit of measurement

    # Quantities and pricing
    quantity = Column(Integer, nullable=False)  # Total ever registered
    unit_price = Column(Float, nullable=False)
    total_price = Column(Float, nullable=False)
    available_quantity = Column(Integer, nullable=False)

    property_type = Column(String(50), nullable=False, default=PropertyType.PERMANENT.value)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    @property
    def reserved_quantity(self) -> int:
        """Units reserved by approvals (issued or awaiting issuance)"""
        return (self.quantity or 0) - (self.available_quantity or 0)
