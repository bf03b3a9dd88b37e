"""
InventoryLedger - sole writer of Property.available_quantity

Every mutation is a single conditional UPDATE so concurrent reservations
against the same property serialize in the database instead of in Python.
The ledger never commits; the coordinator owns the transaction.
"""
import logging
from typing import Optional

from sqlalchemy import case
from sqlalchemy.orm import Session

from ird_properties.core.errors import NotFound, InvalidQuantity, InsufficientStock
from ird_properties.models.property import Property, PropertyType

logger = logging.getLogger(__name__)


class InventoryLedger:

    def __init__(self, db: Session):
        self.db = db

    def _exists(self, property_id: Optional[int]) -> bool:
        if property_id is None:
            return False
        return self.db.query(Property.id).filter(Property.id == property_id).first() is not None

    def _not_found(self, property_id: Optional[int]) -> NotFound:
        return NotFound(f"Property {property_id} not found")

    def register(
        self,
        *,
        number: str,
        name: str,
        model_number: str,
        serial_number: str,
        date: str,
        company_name: str,
        measurement: str,
        quantity: int,
        unit_price: float,
        property_type: PropertyType,
        model_19_number: Optional[str] = None,
    ) -> Property:
        """Add a property to the catalog with all of its stock available"""
        if quantity < 0:
            raise InvalidQuantity("Quantity cannot be negative")
        if unit_price < 0:
            raise InvalidQuantity("Unit price cannot be negative")

        prop = Property(
            number=number,
            name=name,
            model_number=model_number,
            model_19_number=model_19_number,
            serial_number=serial_number,
            date=date,
            company_name=company_name,
            measurement=measurement,
            quantity=quantity,
            unit_price=unit_price,
            total_price=quantity * unit_price,
            property_type=PropertyType(property_type).value,
            available_quantity=quantity,
        )
        self.db.add(prop)
        self.db.flush()
        logger.info(f"Registered property {prop.number} with quantity {quantity}")
        return prop

    def reserve(self, property_id: Optional[int], amount: int) -> None:
        """Decrement availability by amount, only if that much is available"""
        if amount < 1:
            raise InvalidQuantity("Reservation amount must be at least 1")

        updated = self.db.query(Property).filter(
            Property.id == property_id,
            Property.available_quantity >= amount
        ).update(
            {Property.available_quantity: Property.available_quantity - amount},
            synchronize_session=False
        )
        if updated == 1:
            return

        if not self._exists(property_id):
            raise self._not_found(property_id)
        available = self.get_available(property_id)
        raise InsufficientStock(
            f"Cannot reserve {amount} of property {property_id}: only {available} available"
        )

    def release(self, property_id: Optional[int], amount: int) -> None:
        """
        Return reserved stock to availability, never exceeding the registered total.
        Used only to compensate a reservation whose downstream step failed.
        """
        if amount < 1:
            raise InvalidQuantity("Release amount must be at least 1")

        restored = Property.available_quantity + amount
        updated = self.db.query(Property).filter(Property.id == property_id).update(
            {Property.available_quantity: case(
                (restored > Property.quantity, Property.quantity),
                else_=restored
            )},
            synchronize_session=False
        )
        if updated != 1:
            raise self._not_found(property_id)
        logger.info(f"Released {amount} units back to property {property_id}")

    def resize(self, property_id: int, new_quantity: int, unit_price: float) -> None:
        """
        Change the registered total. Availability shifts by the same delta so
        units already reserved stay reserved; shrinking below the reserved
        amount is refused.
        """
        if new_quantity < 0:
            raise InvalidQuantity("Quantity cannot be negative")
        if unit_price < 0:
            raise InvalidQuantity("Unit price cannot be negative")

        delta = new_quantity - Property.quantity
        updated = self.db.query(Property).filter(
            Property.id == property_id,
            Property.available_quantity + delta >= 0
        ).update(
            {
                Property.available_quantity: Property.available_quantity + delta,
                Property.quantity: new_quantity,
                Property.unit_price: unit_price,
                Property.total_price: new_quantity * unit_price,
            },
            synchronize_session=False
        )
        if updated == 1:
            return

        if not self._exists(property_id):
            raise self._not_found(property_id)
        reserved = self.db.query(
            Property.quantity - Property.available_quantity
        ).filter(Property.id == property_id).scalar()
        raise InvalidQuantity(
            f"Quantity cannot be lower than the {reserved} units already reserved"
        )

    def get_available(self, property_id: Optional[int]) -> int:
        """Snapshot read of the available quantity"""
        row = self.db.query(Property.available_quantity).filter(Property.id == property_id).first()
        if row is None:
            raise self._not_found(property_id)
        return row[0]
