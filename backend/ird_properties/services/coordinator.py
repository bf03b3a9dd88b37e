"""
LifecycleCoordinator - one externally visible operation per API action

Sequences the ledger, the request state machine and the issuance recorder
inside a single database transaction, and holds the only role check for
every operation. Callers never see a partially applied operation: any
failure rolls the whole unit back before it is re-raised.
"""
import enum
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, List, Optional, Set

from sqlalchemy import func
from sqlalchemy.exc import DisconnectionError, IntegrityError, OperationalError
from sqlalchemy.orm import Session

from ird_properties.core.errors import (
    LifecycleError, NotFound, DuplicateNumber, Unauthorized, PersistenceError
)
from ird_properties.models.issuance import Issuance
from ird_properties.models.property import Property, PropertyType
from ird_properties.models.request import PropertyRequest, RequestStatus
from ird_properties.models.user import User, UserRole
from ird_properties.services.issuance import IssuanceRecorder
from ird_properties.services.ledger import InventoryLedger
from ird_properties.services.lifecycle import RequestLifecycle

logger = logging.getLogger(__name__)


class Action(str, enum.Enum):
    SUBMIT = "submit"
    APPROVE = "approve"
    ADJUST = "adjust"
    REJECT = "reject"
    ISSUE = "issue"
    MANAGE_CATALOG = "manage_catalog"


# Role matrix: requesters submit, approvers decide, issuers issue
PERMISSIONS: Dict[Action, Set[UserRole]] = {
    Action.SUBMIT: {UserRole.USER},
    Action.APPROVE: {UserRole.ADMIN},
    Action.ADJUST: {UserRole.ADMIN},
    Action.REJECT: {UserRole.ADMIN},
    Action.ISSUE: {UserRole.STORE_MANAGER},
    Action.MANAGE_CATALOG: {UserRole.ADMIN, UserRole.STORE_MANAGER},
}

# Fields that can be edited directly; quantity and price go through the ledger
DESCRIPTIVE_FIELDS = (
    "number", "name", "model_number", "model_19_number", "serial_number",
    "date", "company_name", "measurement",
)


@dataclass
class RequestFilter:
    status: Optional[RequestStatus] = None
    property_id: Optional[int] = None
    user_id: Optional[int] = None


@dataclass
class IssuanceFilter:
    property_id: Optional[int] = None
    user_id: Optional[int] = None
    is_permanent: Optional[bool] = None


class LifecycleCoordinator:

    def __init__(self, db: Session):
        self.db = db
        self.ledger = InventoryLedger(db)
        self.lifecycle = RequestLifecycle(db, self.ledger)
        self.recorder = IssuanceRecorder(db, self.lifecycle)

    def authorize(self, actor: User, action: Action) -> None:
        allowed = PERMISSIONS[action]
        if UserRole(actor.role) not in allowed:
            logger.warning(f"User {actor.id} ({actor.role}) denied {action.value}")
            raise Unauthorized(
                f"Role '{actor.role}' cannot {action.value}. "
                f"Required roles: {sorted(r.value for r in allowed)}"
            )

    @contextmanager
    def _transaction(self, operation: str):
        """Commit on success, roll back everything on any failure"""
        try:
            yield
            self.db.commit()
        except LifecycleError as e:
            self.db.rollback()
            logger.warning(f"{operation} failed: {e.kind}: {e.message}")
            raise
        except (OperationalError, DisconnectionError) as e:
            self.db.rollback()
            logger.error(f"{operation} failed on the database: {e}")
            raise PersistenceError(f"{operation} could not be completed, please retry") from e
        except Exception:
            self.db.rollback()
            logger.exception(f"{operation} failed unexpectedly")
            raise

    # ============== REQUEST LIFECYCLE ==============

    def submit(self, actor: User, property_id: int, requested_quantity: int) -> PropertyRequest:
        self.authorize(actor, Action.SUBMIT)
        with self._transaction("submit"):
            request = self.lifecycle.submit(actor, property_id, requested_quantity)
        self.db.refresh(request)
        logger.info(
            f"Request {request.id} submitted by user {actor.id}: "
            f"{requested_quantity} x property {property_id}"
        )
        return request

    def approve(self, actor: User, request_id: int) -> PropertyRequest:
        self.authorize(actor, Action.APPROVE)
        with self._transaction(f"approve request {request_id}"):
            request = self.lifecycle.approve(request_id, actor)
        self.db.refresh(request)
        logger.info(f"Request {request_id} approved by user {actor.id}, reserved {request.approved_quantity}")
        return request

    def adjust(self, actor: User, request_id: int, approved_quantity: int, reason: Optional[str] = None) -> PropertyRequest:
        self.authorize(actor, Action.ADJUST)
        with self._transaction(f"adjust request {request_id}"):
            request = self.lifecycle.adjust(request_id, actor, approved_quantity, reason)
        self.db.refresh(request)
        return request

    def reject(self, actor: User, request_id: int, reason: Optional[str] = None) -> PropertyRequest:
        self.authorize(actor, Action.REJECT)
        with self._transaction(f"reject request {request_id}"):
            request = self.lifecycle.reject(request_id, actor, reason)
        self.db.refresh(request)
        logger.info(f"Request {request_id} rejected by user {actor.id}")
        return request

    def issue(self, actor: User, request_id: int, model_22_number: Optional[str] = None) -> Issuance:
        self.authorize(actor, Action.ISSUE)
        with self._transaction(f"issue request {request_id}"):
            issuance = self.recorder.issue(request_id, actor, model_22_number)
        self.db.refresh(issuance)
        return issuance

    # ============== CATALOG ==============

    def _check_number_free(self, number: str, property_id: Optional[int] = None) -> None:
        query = self.db.query(Property.id).filter(Property.number == number)
        if property_id is not None:
            query = query.filter(Property.id != property_id)
        if query.first() is not None:
            raise DuplicateNumber(f"Property number '{number}' already exists")

    def register_property(self, actor: User, **fields) -> Property:
        self.authorize(actor, Action.MANAGE_CATALOG)
        with self._transaction("register property"):
            self._check_number_free(fields["number"])
            try:
                prop = self.ledger.register(**fields)
            except IntegrityError:
                # Lost a race with another registration of the same number
                raise DuplicateNumber(f"Property number '{fields['number']}' already exists")
        self.db.refresh(prop)
        return prop

    def update_property(self, actor: User, property_id: int, **fields) -> Property:
        self.authorize(actor, Action.MANAGE_CATALOG)
        with self._transaction(f"update property {property_id}"):
            prop = self.get_property(property_id)
            if fields.get("number") and fields["number"] != prop.number:
                self._check_number_free(fields["number"], property_id)

            for key in DESCRIPTIVE_FIELDS:
                if fields.get(key) is not None:
                    setattr(prop, key, fields[key])
            if fields.get("property_type") is not None:
                prop.property_type = PropertyType(fields["property_type"]).value
            try:
                self.db.flush()
            except IntegrityError:
                raise DuplicateNumber(f"Property number '{fields.get('number')}' already exists")

            if fields.get("quantity") is not None or fields.get("unit_price") is not None:
                quantity = fields["quantity"] if fields.get("quantity") is not None else prop.quantity
                unit_price = fields["unit_price"] if fields.get("unit_price") is not None else prop.unit_price
                self.ledger.resize(property_id, quantity, unit_price)
        self.db.refresh(prop)
        logger.info(f"Property {property_id} updated by user {actor.id}")
        return prop

    def delete_property(self, actor: User, property_id: int) -> None:
        """Remove a property; requests and issuances keep their copied fields"""
        self.authorize(actor, Action.MANAGE_CATALOG)
        with self._transaction(f"delete property {property_id}"):
            prop = self.get_property(property_id)
            self.db.query(PropertyRequest).filter(
                PropertyRequest.property_id == property_id
            ).update({PropertyRequest.property_id: None}, synchronize_session=False)
            self.db.query(Issuance).filter(
                Issuance.property_id == property_id
            ).update({Issuance.property_id: None}, synchronize_session=False)
            self.db.delete(prop)
        logger.info(f"Property {property_id} deleted by user {actor.id}")

    # ============== READS ==============

    def list_properties(self, skip: int = 0, limit: int = 100) -> List[Property]:
        return self.db.query(Property).order_by(
            Property.created_at.desc(), Property.id.desc()
        ).offset(skip).limit(limit).all()

    def get_property(self, property_id: int) -> Property:
        prop = self.db.query(Property).filter(Property.id == property_id).first()
        if not prop:
            raise NotFound(f"Property {property_id} not found")
        return prop

    def list_requests(self, actor: User, filters: Optional[RequestFilter] = None,
                      skip: int = 0, limit: int = 100) -> List[PropertyRequest]:
        """List requests; requesters only ever see their own"""
        filters = filters or RequestFilter()
        query = self.db.query(PropertyRequest)

        if actor.role == UserRole.USER.value:
            query = query.filter(PropertyRequest.user_id == actor.id)
        elif filters.user_id is not None:
            query = query.filter(PropertyRequest.user_id == filters.user_id)
        if filters.status is not None:
            query = query.filter(PropertyRequest.status == RequestStatus(filters.status).value)
        if filters.property_id is not None:
            query = query.filter(PropertyRequest.property_id == filters.property_id)

        return query.order_by(
            PropertyRequest.created_at.desc(), PropertyRequest.id.desc()
        ).offset(skip).limit(limit).all()

    def get_request(self, actor: User, request_id: int) -> PropertyRequest:
        request = self.lifecycle.get(request_id)
        if actor.role == UserRole.USER.value and request.user_id != actor.id:
            raise Unauthorized("You can only view your own requests")
        return request

    def list_issuances(self, filters: Optional[IssuanceFilter] = None,
                       skip: int = 0, limit: int = 100) -> List[Issuance]:
        filters = filters or IssuanceFilter()
        query = self.db.query(Issuance)
        if filters.property_id is not None:
            query = query.filter(Issuance.property_id == filters.property_id)
        if filters.user_id is not None:
            query = query.filter(Issuance.user_id == filters.user_id)
        if filters.is_permanent is not None:
            query = query.filter(Issuance.is_permanent == filters.is_permanent)
        return query.order_by(
            Issuance.issued_at.desc(), Issuance.id.desc()
        ).offset(skip).limit(limit).all()

    def dashboard_stats(self) -> dict:
        """Aggregate counters read straight from the current rows"""
        total_properties, total_items, available_items, total_value = self.db.query(
            func.count(Property.id),
            func.coalesce(func.sum(Property.quantity), 0),
            func.coalesce(func.sum(Property.available_quantity), 0),
            func.coalesce(func.sum(Property.total_price), 0.0),
        ).one()
        total_requests = self.db.query(func.count(PropertyRequest.id)).scalar()
        pending_requests = self.db.query(func.count(PropertyRequest.id)).filter(
            PropertyRequest.status == RequestStatus.PENDING.value
        ).scalar()
        issued_properties, issued_items = self.db.query(
            func.count(Issuance.id),
            func.coalesce(func.sum(Issuance.issued_quantity), 0),
        ).one()

        return {
            "total_properties": total_properties,
            "total_requests": total_requests,
            "pending_requests": pending_requests,
            "issued_properties": issued_properties,
            "total_items": total_items,
            "available_items": available_items,
            "issued_items": issued_items,
            "total_value": float(total_value),
        }
