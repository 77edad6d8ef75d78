"""Order visibility policies, tested without the HTTP layer."""

import uuid

import pytest
from sqlalchemy import select

from storedesk.core.errors import Forbidden
from storedesk.models.order import Order
from storedesk.schemas.auth import CurrentAdmin
from storedesk.services.visibility import BranchVisibility, OwnerVisibility, policy_for


def _admin(role: str, branch: str | None = None) -> CurrentAdmin:
    return CurrentAdmin(id=uuid.uuid4(), username="x", role=role, branch=branch)


def _sql(query) -> str:
    return str(query.compile(compile_kwargs={"literal_binds": True}))


def test_owner_policy_sees_everything():
    policy = policy_for(_admin("owner"))
    assert isinstance(policy, OwnerVisibility)

    query = select(Order)
    assert policy.scope(query) is query


def test_branch_manager_policy_sees_own_branch_only():
    policy = policy_for(_admin("branch manager", "north"))
    assert isinstance(policy, BranchVisibility)

    compiled = _sql(policy.scope(select(Order)))
    assert "orders.branch = 'north'" in compiled
    assert "south" not in compiled


def test_branch_scope_keeps_existing_criteria():
    policy = policy_for(_admin("branch manager", "north"))
    compiled = _sql(policy.scope(select(Order).where(Order.order_number == "ORD-1001")))
    assert "orders.order_number = 'ORD-1001'" in compiled
    assert "orders.branch = 'north'" in compiled


def test_branch_manager_without_branch_is_forbidden():
    with pytest.raises(Forbidden):
        policy_for(_admin("branch manager"))


def test_unknown_role_is_forbidden():
    with pytest.raises(Forbidden):
        policy_for(_admin("cashier"))
