from __future__ import annotations
from typing import NamedTuple

from keypass_core.errors import (
    PassphraseError,
    NoPassphraseInputError,
    PassphraseMismatchError,
    PassphraseUnavailableError,
    UnknownRoleError,
)


class PassphraseResult(NamedTuple):
    passphrase: str
    give_up: bool


GIVE_UP = PassphraseResult("", True)


class BaseRetriever:
    """
    Retriever contract.

    retrieve(key_name, role, create_new, attempt) -> PassphraseResult

    - key_name is the composite "<alias>/<key id>" path of the key.
    - attempt counts how many times this same request has already failed;
      it is maintained by the caller and only interpreted here.
    - give_up=True tells the caller to stop retrying. It is not an error and
      comes with an empty passphrase.
    - Failures (no input, confirmation mismatch, stream errors) are raised.
    """
    name: str = "base"

    def retrieve(
        self,
        key_name: str,
        role: str,
        create_new: bool = False,
        attempt: int = 0,
    ) -> PassphraseResult:
        raise NotImplementedError

    def __call__(
        self,
        key_name: str,
        role: str,
        create_new: bool = False,
        attempt: int = 0,
    ) -> PassphraseResult:
        return self.retrieve(key_name, role, create_new, attempt)


__all__ = [
    "BaseRetriever",
    "PassphraseResult",
    "GIVE_UP",
    "PassphraseError",
    "NoPassphraseInputError",
    "PassphraseMismatchError",
    "PassphraseUnavailableError",
    "UnknownRoleError",
]
