"""
Identities passed from the HTTP boundary into the service layer.
Role checks happen once, in mindcare.api.dependencies; services accept these objects
instead of re-reading the role.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class AuthenticatedUser:
    user_id: str
    email: str
    role: str  # student | counsellor | admin


@dataclass(frozen=True)
class AdminAuthorization:
    """Proof that the boundary checked the caller is an admin."""
    admin_id: str
