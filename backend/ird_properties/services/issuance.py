"""
IssuanceRecorder - turns an approved or adjusted request into an Issuance

Issuing is an audit transition only: stock was already taken out of
availability when the request was approved, so the ledger is not called.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ird_properties.core.errors import NotFound, InvalidTransition, AlreadyIssued
from ird_properties.models.issuance import Issuance
from ird_properties.models.property import Property, PropertyType
from ird_properties.models.request import RequestStatus
from ird_properties.models.user import User
from ird_properties.services.lifecycle import RequestLifecycle

logger = logging.getLogger(__name__)

ISSUABLE_STATUSES = {RequestStatus.APPROVED.value, RequestStatus.ADJUSTED.value}


class IssuanceRecorder:

    def __init__(self, db: Session, lifecycle: Optional[RequestLifecycle] = None):
        self.db = db
        self.lifecycle = lifecycle or RequestLifecycle(db)

    def _already_issued(self, request_id: int) -> bool:
        return self.db.query(Issuance.id).filter(Issuance.request_id == request_id).first() is not None

    def _check_issuable(self, request_id: int, status: str) -> None:
        if status == RequestStatus.ISSUED.value or self._already_issued(request_id):
            raise AlreadyIssued(f"Request {request_id} has already been issued")
        if status not in ISSUABLE_STATUSES:
            raise InvalidTransition(
                f"Request {request_id} is {status}; only approved or adjusted requests can be issued"
            )

    def issue(self, request_id: int, issuer: User, model_22_number: Optional[str] = None) -> Issuance:
        request = self.lifecycle.get(request_id)
        self._check_issuable(request.id, request.status)

        prop = None
        if request.property_id is not None:
            prop = self.db.query(Property).filter(Property.id == request.property_id).first()
        if not prop:
            raise NotFound(f"Property {request.property_id} for request {request_id} not found")

        # Snapshot everything the record needs before the request row is expired
        source_status = request.status
        property_type = PropertyType(prop.property_type)
        issued_at = datetime.now(timezone.utc)
        issuance = Issuance(
            request_id=request.id,
            property_id=prop.id,
            user_id=request.user_id,
            user_name=request.user_name,
            user_department=request.user_department,
            property_number=prop.number,
            property_name=prop.name,
            model_number=prop.model_number,
            model_19_number=prop.model_19_number,
            model_22_number=model_22_number,
            serial_number=prop.serial_number,
            quantity_type=prop.measurement,
            property_type=property_type.value,
            is_permanent=property_type.is_permanent,
            issued_quantity=request.final_quantity,
            issued_at=issued_at,
            store_manager_id=issuer.id,
            store_manager_name=issuer.name,
        )

        try:
            self.lifecycle.compare_and_set(
                request, source_status, RequestStatus.ISSUED.value,
                issued_at=issued_at,
                store_manager_id=issuer.id,
            )
        except InvalidTransition:
            # Lost a race: report what the winner did
            self._check_issuable(request_id, self.lifecycle.current_status(request_id))
            raise

        self.db.add(issuance)
        try:
            self.db.flush()
        except IntegrityError:
            raise AlreadyIssued(f"Request {request_id} has already been issued")

        logger.info(
            f"Issued {issuance.issued_quantity} x {issuance.property_number} "
            f"for request {request_id} (permanent={issuance.is_permanent})"
        )
        return issuance
