import pytest

from ird_properties.core.errors import NotFound, InvalidQuantity, InvalidTransition, InsufficientStock
from ird_properties.models.request import PropertyRequest, RequestStatus
from ird_properties.services.ledger import InventoryLedger
from ird_properties.services.lifecycle import RequestLifecycle

from tests.conftest import make_property


# ============== TRANSITION TABLE ==============


@pytest.mark.parametrize("from_status,to_status", [
    ("pending", "approved"),
    ("pending", "adjusted"),
    ("pending", "rejected"),
    ("approved", "issued"),
    ("adjusted", "issued"),
])
def test_allowed_transitions(from_status, to_status):
    assert RequestLifecycle.can_transition(from_status, to_status)


@pytest.mark.parametrize("from_status,to_status", [
    ("pending", "issued"),
    ("approved", "rejected"),
    ("approved", "adjusted"),
    ("adjusted", "approved"),
    ("rejected", "approved"),
    ("rejected", "issued"),
    ("issued", "approved"),
    ("issued", "issued"),
])
def test_disallowed_transitions(from_status, to_status):
    assert not RequestLifecycle.can_transition(from_status, to_status)
    with pytest.raises(InvalidTransition):
        RequestLifecycle.validate_transition(1, from_status, to_status)


# ============== SUBMIT ==============


def test_submit_creates_pending_request_without_reserving(db_session, requester_user, test_property):
    lifecycle = RequestLifecycle(db_session)
    request = lifecycle.submit(requester_user, test_property.id, 4)
    db_session.commit()

    assert request.status == RequestStatus.PENDING.value
    assert request.requested_quantity == 4
    assert request.approved_quantity is None
    assert request.user_name == "Sidrak H."
    assert request.user_department == "ADRD"
    assert request.property_number == test_property.number
    assert request.quantity_type == "pcs"
    assert lifecycle.ledger.get_available(test_property.id) == 10


def test_submit_without_department_uses_placeholder(db_session, requester_user, test_property):
    requester_user.department = None
    db_session.commit()

    request = RequestLifecycle(db_session).submit(requester_user, test_property.id, 1)
    assert request.user_department == "Unknown Department"


def test_submit_more_than_available_is_allowed(db_session, requester_user, test_property):
    request = RequestLifecycle(db_session).submit(requester_user, test_property.id, 50)
    assert request.status == "pending"


@pytest.mark.parametrize("quantity", [0, -1])
def test_submit_invalid_quantity(db_session, requester_user, test_property, quantity):
    with pytest.raises(InvalidQuantity):
        RequestLifecycle(db_session).submit(requester_user, test_property.id, quantity)
    assert db_session.query(PropertyRequest).count() == 0


def test_submit_unknown_property(db_session, requester_user):
    with pytest.raises(NotFound):
        RequestLifecycle(db_session).submit(requester_user, 9999, 1)


# ============== APPROVE ==============


def test_approve_reserves_requested_quantity(db_session, requester_user, admin_user, test_property):
    lifecycle = RequestLifecycle(db_session)
    request = lifecycle.submit(requester_user, test_property.id, 4)

    lifecycle.approve(request.id, admin_user)

    assert request.status == "approved"
    assert request.approved_quantity == 4
    assert request.admin_id == admin_user.id
    assert lifecycle.ledger.get_available(test_property.id) == 6


def test_approve_twice_fails(db_session, requester_user, admin_user, test_property):
    lifecycle = RequestLifecycle(db_session)
    request = lifecycle.submit(requester_user, test_property.id, 2)
    lifecycle.approve(request.id, admin_user)

    with pytest.raises(InvalidTransition):
        lifecycle.approve(request.id, admin_user)
    assert lifecycle.ledger.get_available(test_property.id) == 8


def test_approve_unknown_request(db_session, admin_user):
    with pytest.raises(NotFound):
        RequestLifecycle(db_session).approve(9999, admin_user)


def test_approve_insufficient_stock_leaves_request_pending(db_session, requester_user, admin_user):
    prop = make_property(db_session, number="IRD-0002", quantity=2)
    lifecycle = RequestLifecycle(db_session)
    request = lifecycle.submit(requester_user, prop.id, 3)
    db_session.commit()

    with pytest.raises(InsufficientStock):
        lifecycle.approve(request.id, admin_user)
    db_session.rollback()

    assert lifecycle.current_status(request.id) == "pending"
    assert lifecycle.ledger.get_available(prop.id) == 2


# ============== ADJUST ==============


def test_adjust_reserves_only_approved_quantity(db_session, requester_user, admin_user, test_property):
    lifecycle = RequestLifecycle(db_session)
    request = lifecycle.submit(requester_user, test_property.id, 8)

    lifecycle.adjust(request.id, admin_user, 5, "partial stock")

    assert request.status == "adjusted"
    assert request.approved_quantity == 5
    assert request.reason == "partial stock"
    assert lifecycle.ledger.get_available(test_property.id) == 5


def test_adjust_to_full_quantity_is_allowed(db_session, requester_user, admin_user, test_property):
    lifecycle = RequestLifecycle(db_session)
    request = lifecycle.submit(requester_user, test_property.id, 3)

    lifecycle.adjust(request.id, admin_user, 3, None)
    assert request.approved_quantity == 3


@pytest.mark.parametrize("approved", [0, 9])
def test_adjust_out_of_range(db_session, requester_user, admin_user, test_property, approved):
    lifecycle = RequestLifecycle(db_session)
    request = lifecycle.submit(requester_user, test_property.id, 8)

    with pytest.raises(InvalidQuantity):
        lifecycle.adjust(request.id, admin_user, approved, "too many")

    assert lifecycle.current_status(request.id) == "pending"
    assert lifecycle.ledger.get_available(test_property.id) == 10


def test_adjust_non_pending_request(db_session, requester_user, admin_user, test_property):
    lifecycle = RequestLifecycle(db_session)
    request = lifecycle.submit(requester_user, test_property.id, 4)
    lifecycle.approve(request.id, admin_user)

    with pytest.raises(InvalidTransition):
        lifecycle.adjust(request.id, admin_user, 2, "late")


# ============== REJECT ==============


def test_reject_keeps_stock_untouched(db_session, requester_user, admin_user, test_property):
    lifecycle = RequestLifecycle(db_session)
    request = lifecycle.submit(requester_user, test_property.id, 4)

    lifecycle.reject(request.id, admin_user, "not needed")

    assert request.status == "rejected"
    assert request.reason == "not needed"
    assert request.approved_quantity is None
    assert lifecycle.ledger.get_available(test_property.id) == 10


def test_rejected_is_terminal(db_session, requester_user, admin_user, test_property):
    lifecycle = RequestLifecycle(db_session)
    request = lifecycle.submit(requester_user, test_property.id, 4)
    lifecycle.reject(request.id, admin_user, None)

    with pytest.raises(InvalidTransition):
        lifecycle.approve(request.id, admin_user)
    with pytest.raises(InvalidTransition):
        lifecycle.reject(request.id, admin_user, None)


# ============== COMPARE AND SET ==============


def test_compare_and_set_with_stale_expected_status(db_session, requester_user, admin_user, test_property):
    lifecycle = RequestLifecycle(db_session)
    request = lifecycle.submit(requester_user, test_property.id, 2)
    lifecycle.reject(request.id, admin_user, None)

    # Caller still believes the request is pending
    with pytest.raises(InvalidTransition) as exc_info:
        lifecycle.compare_and_set(request, "pending", "approved", approved_quantity=2)

    assert "is rejected" in exc_info.value.message
    assert lifecycle.current_status(request.id) == "rejected"


def test_ledger_is_shared_with_lifecycle(db_session):
    ledger = InventoryLedger(db_session)
    assert RequestLifecycle(db_session, ledger).ledger is ledger
