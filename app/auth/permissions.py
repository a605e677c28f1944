"""
Central registry of allowed actions per role.
"""
ROLE_ADMIN = "admin"
ROLE_VENDOR = "vendor"
ROLE_COUPLE = "couple"

ROLES = (ROLE_ADMIN, ROLE_VENDOR, ROLE_COUPLE)

# Couples only read the public directory, which needs no scope.
ROLE_SCOPES = {
    ROLE_COUPLE: set(),
    ROLE_VENDOR: {"manage_own_profiles"},
    ROLE_ADMIN:  {"*"},
}


def role_has_scope(role: str, action: str) -> bool:
    scopes = ROLE_SCOPES.get(role, set())
    return "*" in scopes or action in scopes
