"""Auth and admin request/response schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from storedesk.models.admin import RoleType


# ── Login ──────────────────────────────────────────
class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1)


class AdminProfile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    username: str
    role: RoleType
    branch: str | None = None


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: AdminProfile


# ── Current Admin (from token) ─────────────────────
class CurrentAdmin(BaseModel):
    id: UUID
    username: str
    role: str
    branch: str | None = None


# ── Admin management ───────────────────────────────
class AdminResponse(AdminProfile):
    id: UUID


class AdminCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=4)
    role: RoleType
    branch: str | None = Field(None, max_length=100)

    @model_validator(mode="after")
    def check_branch_matches_role(self) -> "AdminCreate":
        if self.role is RoleType.BRANCH_MANAGER and not self.branch:
            raise ValueError("branch is required for a branch manager")
        if self.role is RoleType.OWNER and self.branch:
            raise ValueError("owners are not scoped to a branch")
        return self


class AdminUpdate(BaseModel):
    """Only password and branch may change after creation."""

    password: str | None = Field(None, min_length=4)
    branch: str | None = Field(None, min_length=1, max_length=100)
