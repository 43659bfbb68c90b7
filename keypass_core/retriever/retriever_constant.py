# keypass_core/retriever/retriever_constant.py
from __future__ import annotations

from keypass_core.retriever.retriever_base import GIVE_UP, BaseRetriever, PassphraseResult
from keypass_core.roles import validate_role


class ConstantRetriever(BaseRetriever):
    """Always offers the same passphrase; gives up on any retry."""
    name = "constant"

    def __init__(self, passphrase: str):
        self.passphrase = passphrase

    def retrieve(self, key_name, role, create_new=False, attempt=0) -> PassphraseResult:
        validate_role(role)
        if attempt > 0:
            return GIVE_UP
        return PassphraseResult(self.passphrase, False)
