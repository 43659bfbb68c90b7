"""
keypass_core.prompt
-------------------
Renders the text shown to the user when a passphrase is requested, and
splits composite key names ("<alias>/<key id>") into their display parts.
"""

from __future__ import annotations

from typing import Optional, Tuple

# Only this many characters of a key id are ever displayed
ID_CHARS_TO_DISPLAY = 7

KEY_NAME_SEPARATOR = "/"


def split_key_name(key_name: str) -> Tuple[Optional[str], str]:
    """
    Split "repo/0123456789abcdef" into ("repo", "0123456789abcdef").

    The alias is everything before the last separator, so aliases may contain
    slashes themselves ("docker.io/library/repo/<id>"). A key name without a
    separator has no alias.
    """
    alias, sep, key_id = key_name.rpartition(KEY_NAME_SEPARATOR)
    if not sep:
        return None, key_name
    return alias or None, key_id


def short_id(key_id: str) -> str:
    return key_id[:ID_CHARS_TO_DISPLAY]


def format_prompt(
    key_id: str,
    role: str,
    alias: Optional[str],
    create_new: bool,
    confirm: bool = False,
) -> str:
    """
    Build one prompt line.

    - create_new=False: "Enter passphrase for {role} key with ID {id} ({alias}): "
    - create_new=True:  "Enter passphrase for new {role} key with ID {id} ({alias}): "
    - confirm=True:     "Repeat passphrase for new {role} key with ID {id} ({alias}):"
    """
    where = f"{short_id(key_id)} ({alias})" if alias else short_id(key_id)
    if confirm:
        return f"Repeat passphrase for new {role} key with ID {where}:"
    if create_new:
        return f"Enter passphrase for new {role} key with ID {where}: "
    return f"Enter passphrase for {role} key with ID {where}: "
