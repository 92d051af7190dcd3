"""Pure authorization predicates shared by services and the request gate."""


def is_owner(*, actor_id, owner_id) -> bool:
    """Return True if the actor owns the resource."""
    if actor_id is None or owner_id is None:
        return False
    return str(actor_id) == str(owner_id)


def same_tenant(*, actor_tenant, resource_tenant) -> bool:
    """Return True if a staff actor belongs to the resource's restaurant."""
    return bool(actor_tenant) and str(actor_tenant) == str(resource_tenant)
