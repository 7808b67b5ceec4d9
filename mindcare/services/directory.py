"""
User profiles and the counsellor directory, kept under user:<id> in the key-value store.
"""
from collections import Counter
from typing import Optional

from mindcare.core.errors import NotFoundError
from mindcare.db.kv_store import KVStore
from mindcare.schemas.user import Counsellor, UserProfile

USER_PREFIX = "user:"


def profile_key(user_id: str) -> str:
    return f"{USER_PREFIX}{user_id}"


def save_profile(store: KVStore, profile: UserProfile) -> None:
    store.set(profile_key(profile.id), profile.to_record())


def get_profile(store: KVStore, user_id: str) -> Optional[UserProfile]:
    record = store.get(profile_key(user_id))
    return UserProfile.model_validate(record) if record else None


def require_profile(store: KVStore, user_id: str) -> UserProfile:
    profile = get_profile(store, user_id)
    if not profile:
        raise NotFoundError("User profile not found")
    return profile


def list_profiles(store: KVStore) -> list[UserProfile]:
    return [UserProfile.model_validate(r) for r in store.get_by_prefix(USER_PREFIX)]


def list_counsellors(store: KVStore) -> list[Counsellor]:
    """Counsellors ordered by sign-up time, then id, so escalation always picks the same one first."""
    counsellors = sorted(
        (p for p in list_profiles(store) if p.role == "counsellor"),
        key=lambda p: (p.created_at, p.id),
    )
    return [Counsellor(id=p.id, name=p.name) for p in counsellors]


def users_by_role(store: KVStore) -> dict[str, int]:
    return dict(Counter(p.role for p in list_profiles(store)))
