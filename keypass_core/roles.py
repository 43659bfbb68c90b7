"""
keypass_core.roles
------------------
Trust-metadata role names as far as passphrase handling cares about them.

Canonical roles are the fixed top-level roles; their passphrases may be
cached for the session. Delegation roles live under "targets/" and are
never cached.
"""

from __future__ import annotations

from keypass_core.errors import UnknownRoleError

ROOT = "root"
TARGETS = "targets"
SNAPSHOT = "snapshot"
TIMESTAMP = "timestamp"

CANONICAL_ROLES = frozenset({ROOT, TARGETS, SNAPSHOT, TIMESTAMP})

DELEGATION_PREFIX = TARGETS + "/"


def is_canonical(role: str) -> bool:
    return role in CANONICAL_ROLES


def is_delegation(role: str) -> bool:
    return role.startswith(DELEGATION_PREFIX)


def validate_role(role: str) -> str:
    """Return role unchanged, or raise UnknownRoleError if it is neither
    canonical nor a delegation."""
    if not isinstance(role, str) or not (is_canonical(role) or is_delegation(role)):
        raise UnknownRoleError(f"Unknown role: {role!r}")
    return role
