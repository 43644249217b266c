# Role capabilities with inheritance support
ROLE_CAPABILITIES = {
    "user": ["read"],
    "editor": ["edit_posts", "manage_categories"],
    "manager": ["edit_users"],  # Manager extends editor capabilities
    "admin": ["manage_options", "edit_users", "list_users"],  # Admin extends editor capabilities
    "superadmin": ["*"],  # Superadmin has unrestricted access
}

# Capability required to see and edit meta data
MANAGE_OPTIONS = "manage_options"

_INHERITS = {
    "editor": ["user"],
    "manager": ["editor"],
    "admin": ["editor"],
}


def get_role_capabilities(role: str) -> list:
    """
    Returns the capabilities for a given role, including inherited capabilities.
    """
    if role not in ROLE_CAPABILITIES:
        raise ValueError(f"Invalid role: {role}")

    capabilities = set(ROLE_CAPABILITIES[role])
    for parent in _INHERITS.get(role, []):
        capabilities.update(get_role_capabilities(parent))

    return list(capabilities)


def role_can(role: str | None, capability: str) -> bool:
    """Return True if the role grants the capability (unknown roles grant nothing)."""
    if not role or role not in ROLE_CAPABILITIES:
        return False
    allowed = get_role_capabilities(role)
    return "*" in allowed or capability in allowed


def user_can(user, capability: str) -> bool:
    """Return True if the user's role grants the capability."""
    if user is None:
        return False
    role = user.role.name if getattr(user, "role", None) else None
    return role_can(role, capability)
