# keypass_core/retriever/retriever_prompt.py
from __future__ import annotations
import threading
from typing import Dict, Optional, TextIO

from keypass_core.attempts import AttemptController
from keypass_core.cache import PassphraseCache
from keypass_core.logger import get_logger
from keypass_core.prompt import format_prompt, short_id, split_key_name
from keypass_core.retriever.retriever_base import (
    GIVE_UP,
    BaseRetriever,
    NoPassphraseInputError,
    PassphraseMismatchError,
    PassphraseResult,
)
from keypass_core.roles import is_canonical, validate_role

log = get_logger("keypass.retriever.prompt")


class PromptRetriever(BaseRetriever):
    """
    Interactive retriever bound to an input and an output text stream.

    Configured once, called many times:
        retriever = PromptRetriever(sys.stdin, sys.stdout)
        passphrase, give_up = retriever.retrieve("repo/0123456789abcdef", "root")

    Flow per call:
        give-up check -> cache (first attempt only) -> prompt -> [confirm] -> cache store

    Canonical role passphrases are cached in `cache` (pass a shared
    PassphraseCache to scope it to a wider signing session). Delegation
    roles always prompt again.
    """
    name = "prompt"

    def __init__(
        self,
        in_stream: TextIO,
        out_stream: TextIO,
        cache: Optional[PassphraseCache] = None,
        attempts: Optional[AttemptController] = None,
        display_names: Optional[Dict[str, str]] = None,
    ):
        self.in_stream = in_stream
        self.out_stream = out_stream
        self.cache = cache if cache is not None else PassphraseCache()
        self.attempts = attempts if attempts is not None else AttemptController()
        self.display_names = dict(display_names or {})
        self._prompt_lock = threading.Lock()

    def retrieve(
        self,
        key_name: str,
        role: str,
        create_new: bool = False,
        attempt: int = 0,
    ) -> PassphraseResult:
        validate_role(role)
        alias, key_id = split_key_name(key_name)

        if self.attempts.should_give_up(attempt):
            log.warning(f"[GIVE UP] role={role} key={short_id(key_id)} attempt={attempt}")
            return GIVE_UP

        cached = self._cached(role, attempt)
        if cached is not None:
            return PassphraseResult(cached, False)

        with self._prompt_lock:
            # another caller may have filled the cache while we waited
            cached = self._cached(role, attempt)
            if cached is not None:
                return PassphraseResult(cached, False)

            passphrase = self._request(key_id, role, alias, create_new)
            self.cache.set(role, passphrase)

        return PassphraseResult(passphrase, False)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _cached(self, role: str, attempt: int) -> Optional[str]:
        # a retry means the cached value was rejected
        if attempt > 0 or not is_canonical(role):
            return None
        passphrase = self.cache.get(role)
        if passphrase is not None:
            log.debug(f"[CACHE HIT] role={role}")
        return passphrase

    def _request(self, key_id: str, role: str, alias: Optional[str], create_new: bool) -> str:
        display_role = self.display_names.get(role, role)
        log.debug(f"[PROMPT] role={role} key={short_id(key_id)} create_new={create_new}")

        self._write(format_prompt(key_id, display_role, alias, create_new))
        passphrase = self._read_line()

        if create_new:
            self._write("\n" + format_prompt(key_id, display_role, alias, True, confirm=True))
            confirmation = self._read_line()
            if confirmation != passphrase:
                log.info(f"[MISMATCH] role={role} key={short_id(key_id)}")
                raise PassphraseMismatchError("The entered passphrases do not match")

        return passphrase

    def _write(self, text: str) -> None:
        self.out_stream.write(text)
        self.out_stream.flush()

    def _read_line(self) -> str:
        line = self.in_stream.readline()
        if not line:
            raise NoPassphraseInputError("No passphrase available on input")
        return line.strip()
