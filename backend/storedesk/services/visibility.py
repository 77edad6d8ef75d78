"""Role-keyed order visibility policies.

Each admin role maps to a policy deciding which orders it may see. A policy
narrows an order query (``scope``); listing, lookups and status updates all
build their queries through it.
"""

from sqlalchemy import Select

from storedesk.core.errors import Forbidden
from storedesk.models.admin import RoleType
from storedesk.models.order import Order
from storedesk.schemas.auth import CurrentAdmin


class VisibilityPolicy:
    def scope(self, query: Select) -> Select:
        raise NotImplementedError


class OwnerVisibility(VisibilityPolicy):
    """Owners see every order."""

    def scope(self, query: Select) -> Select:
        return query


class BranchVisibility(VisibilityPolicy):
    """Branch managers see only orders placed at their branch."""

    def __init__(self, branch: str):
        self.branch = branch

    def scope(self, query: Select) -> Select:
        return query.where(Order.branch == self.branch)


def _branch_policy(admin: CurrentAdmin) -> VisibilityPolicy:
    if not admin.branch:
        raise Forbidden("Branch manager account has no branch assigned")
    return BranchVisibility(admin.branch)


POLICIES = {
    RoleType.OWNER.value: lambda admin: OwnerVisibility(),
    RoleType.BRANCH_MANAGER.value: _branch_policy,
}


def policy_for(admin: CurrentAdmin) -> VisibilityPolicy:
    """Return the visibility policy for the admin's role; unknown roles are forbidden."""
    factory = POLICIES.get(admin.role)
    if factory is None:
        raise Forbidden(f"Role '{admin.role}' may not view orders")
    return factory(admin)
