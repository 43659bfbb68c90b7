# keypass_core/retriever/retriever_env.py
from __future__ import annotations
import os
from typing import Mapping, Optional

from keypass_core.logger import get_logger
from keypass_core.retriever.retriever_base import (
    GIVE_UP,
    BaseRetriever,
    PassphraseResult,
    PassphraseUnavailableError,
)
from keypass_core.roles import is_delegation, validate_role

log = get_logger("keypass.retriever.env")


class EnvRetriever(BaseRetriever):
    """
    Non-interactive retriever reading passphrases from the environment.

    Variables: KEYPASS_ROOT_PASSPHRASE, KEYPASS_TARGETS_PASSPHRASE,
    KEYPASS_SNAPSHOT_PASSPHRASE, KEYPASS_TIMESTAMP_PASSPHRASE and, for every
    delegation role, KEYPASS_DELEGATION_PASSPHRASE.

    A variable offers the same value on every call, so a retry gives up
    instead of repeating it. Roles without a variable go to `fallback`
    (typically a PromptRetriever).
    """
    name = "env"

    def __init__(
        self,
        fallback: Optional[BaseRetriever] = None,
        prefix: str = "KEYPASS_",
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.fallback = fallback
        self.prefix = prefix
        self.environ = environ if environ is not None else os.environ

    def variable_for(self, role: str) -> str:
        label = "DELEGATION" if is_delegation(role) else role.upper()
        return f"{self.prefix}{label}_PASSPHRASE"

    def retrieve(
        self,
        key_name: str,
        role: str,
        create_new: bool = False,
        attempt: int = 0,
    ) -> PassphraseResult:
        validate_role(role)
        var = self.variable_for(role)
        value = self.environ.get(var)

        if value is None:
            if self.fallback is not None:
                return self.fallback.retrieve(key_name, role, create_new, attempt)
            raise PassphraseUnavailableError(f"{var} is not set")

        if attempt > 0:
            log.warning(f"[GIVE UP] {var} was rejected for role={role}")
            return GIVE_UP

        log.debug(f"[ENV] role={role} from {var}")
        return PassphraseResult(value, False)
