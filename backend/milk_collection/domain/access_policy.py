"""Access policy: who may see and change which records and accounts.

Administrators may view and modify everything. Everyone else is limited
to resources they own: milk records whose ``owner_user_id`` is theirs, and
their own account. There are no other capability levels.

These are pure predicates. Callers decide how a denial surfaces; reads
report a denied record as missing so another user's records cannot be
probed for existence.
"""

from milk_collection.domain.entities import Actor, MilkRecord, Role


def is_admin(actor: Actor) -> bool:
    return Role.ADMIN in actor.roles


def can_view(actor: Actor, record: MilkRecord) -> bool:
    """True when the actor may read or modify the given milk record."""
    return is_admin(actor) or record.owner_user_id == actor.id


def can_manage_account(actor: Actor, account_id: int) -> bool:
    """True when the actor may read or modify the account with this id."""
    return is_admin(actor) or account_id == actor.id


def visible_to(actor: Actor, records: list[MilkRecord]) -> list[MilkRecord]:
    """Filter records down to the ones the actor may see, preserving order."""
    if is_admin(actor):
        return list(records)
    return [r for r in records if r.owner_user_id == actor.id]
