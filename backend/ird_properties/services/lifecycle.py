"""
RequestLifecycle - state machine for PropertyRequest.status

Encodes the valid transitions and decides how much inventory each one
reserves. Status writes are compare-and-set updates, so of two racing
transitions on the same request exactly one can win.
"""
import logging
from datetime import datetime, timezone
from typing import Dict, Optional, Set

from sqlalchemy.orm import Session

from ird_properties.core.errors import NotFound, InvalidQuantity, InvalidTransition
from ird_properties.models.property import Property
from ird_properties.models.request import PropertyRequest, RequestStatus
from ird_properties.models.user import User
from ird_properties.services.ledger import InventoryLedger

logger = logging.getLogger(__name__)

PENDING = RequestStatus.PENDING.value
APPROVED = RequestStatus.APPROVED.value
ADJUSTED = RequestStatus.ADJUSTED.value
REJECTED = RequestStatus.REJECTED.value
ISSUED = RequestStatus.ISSUED.value


class RequestLifecycle:

    # Terminal states (cannot transition from these)
    TERMINAL_STATES = {REJECTED, ISSUED}

    # Valid transitions: from_status -> set of allowed to_status values
    TRANSITIONS: Dict[str, Set[str]] = {
        PENDING: {APPROVED, ADJUSTED, REJECTED},
        APPROVED: {ISSUED},
        ADJUSTED: {ISSUED},
    }

    def __init__(self, db: Session, ledger: Optional[InventoryLedger] = None):
        self.db = db
        self.ledger = ledger or InventoryLedger(db)

    @classmethod
    def can_transition(cls, from_status: str, to_status: str) -> bool:
        if from_status in cls.TERMINAL_STATES:
            return False
        return to_status in cls.TRANSITIONS.get(from_status, set())

    @classmethod
    def validate_transition(cls, request_id: int, from_status: str, to_status: str) -> None:
        if not cls.can_transition(from_status, to_status):
            raise InvalidTransition(
                f"Request {request_id} is {from_status} and cannot become {to_status}"
            )

    def get(self, request_id: int) -> PropertyRequest:
        request = self.db.query(PropertyRequest).filter(PropertyRequest.id == request_id).first()
        if not request:
            raise NotFound(f"Request {request_id} not found")
        return request

    def current_status(self, request_id: int) -> str:
        """Read the committed status, bypassing any stale instance in the session"""
        row = self.db.query(PropertyRequest.status).filter(PropertyRequest.id == request_id).first()
        if row is None:
            raise NotFound(f"Request {request_id} not found")
        return row[0]

    def compare_and_set(self, request: PropertyRequest, expected: str, target: str, **values) -> None:
        """Move request from expected to target status, or fail if someone got there first"""
        self.validate_transition(request.id, expected, target)

        values["status"] = target
        values["updated_at"] = datetime.now(timezone.utc)
        updated = self.db.query(PropertyRequest).filter(
            PropertyRequest.id == request.id,
            PropertyRequest.status == expected
        ).update(
            {getattr(PropertyRequest, key): value for key, value in values.items()},
            synchronize_session=False
        )
        if updated != 1:
            actual = self.current_status(request.id)
            raise InvalidTransition(
                f"Request {request.id} is {actual} and cannot become {target}"
            )
        self.db.expire(request)

    # ============== TRANSITIONS ==============

    def submit(self, requester: User, property_id: int, requested_quantity: int) -> PropertyRequest:
        """Create a pending request. Nothing is reserved until approval."""
        if requested_quantity is None or requested_quantity < 1:
            raise InvalidQuantity("Requested quantity must be at least 1")

        prop = self.db.query(Property).filter(Property.id == property_id).first()
        if not prop:
            raise NotFound(f"Property {property_id} not found")

        request = PropertyRequest(
            user_id=requester.id,
            user_name=requester.name,
            user_department=requester.department or "Unknown Department",
            property_id=prop.id,
            property_number=prop.number,
            property_name=prop.name,
            quantity_type=prop.measurement,
            requested_quantity=requested_quantity,
            status=PENDING,
        )
        self.db.add(request)
        self.db.flush()
        return request

    def approve(self, request_id: int, approver: User) -> PropertyRequest:
        """Approve in full, reserving the requested quantity"""
        request = self.get(request_id)
        property_id, quantity = request.property_id, request.requested_quantity
        self.compare_and_set(
            request, PENDING, APPROVED,
            approved_quantity=quantity,
            admin_id=approver.id,
        )
        self.ledger.reserve(property_id, quantity)
        return request

    def adjust(self, request_id: int, approver: User, approved_quantity: int, reason: Optional[str]) -> PropertyRequest:
        """Approve a smaller quantity, reserving only that amount"""
        request = self.get(request_id)
        self.validate_transition(request.id, request.status, ADJUSTED)
        if approved_quantity is None or not 1 <= approved_quantity <= request.requested_quantity:
            raise InvalidQuantity(
                f"Approved quantity must be between 1 and {request.requested_quantity}"
            )

        property_id, requested = request.property_id, request.requested_quantity
        self.compare_and_set(
            request, PENDING, ADJUSTED,
            approved_quantity=approved_quantity,
            reason=reason,
            admin_id=approver.id,
        )
        self.ledger.reserve(property_id, approved_quantity)
        logger.info(f"Request {request_id} adjusted from {requested} to {approved_quantity}")
        return request

    def reject(self, request_id: int, approver: User, reason: Optional[str]) -> PropertyRequest:
        """Reject a pending request. Terminal; nothing was reserved."""
        request = self.get(request_id)
        self.compare_and_set(
            request, PENDING, REJECTED,
            reason=reason,
            admin_id=approver.id,
        )
        return request
