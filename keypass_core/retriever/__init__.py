# keypass_core/retriever/__init__.py
import os
import sys

from keypass_core.attempts import AttemptController, max_attempts_from_env
from keypass_core.cache import PassphraseCache
from keypass_core.retriever.retriever_base import BaseRetriever, PassphraseResult
from keypass_core.retriever.retriever_constant import ConstantRetriever
from keypass_core.retriever.retriever_env import EnvRetriever
from keypass_core.retriever.retriever_prompt import PromptRetriever


def retriever_factory(mode=None, in_stream=None, out_stream=None, cache=None):
    """
    mode:
      - "prompt"   → interactive prompt on in_stream/out_stream (default)
      - "env"      → KEYPASS_<ROLE>_PASSPHRASE, falling back to the prompt
      - "constant" → KEYPASS_PASSPHRASE for every role

    When mode is None it is read from KEYPASS_RETRIEVER. KEYPASS_MAX_ATTEMPTS
    sets the give-up threshold of the prompt retriever.
    """
    mode = (mode or os.getenv("KEYPASS_RETRIEVER", "prompt")).lower()

    if mode == "constant":
        passphrase = os.getenv("KEYPASS_PASSPHRASE")
        if passphrase is None:
            raise ValueError("KEYPASS_PASSPHRASE must be set for the constant retriever")
        return ConstantRetriever(passphrase)

    if mode not in ("prompt", "env"):
        raise ValueError(f"Unknown retriever mode: {mode}")

    prompt = PromptRetriever(
        in_stream if in_stream is not None else sys.stdin,
        out_stream if out_stream is not None else sys.stdout,
        cache=cache if cache is not None else PassphraseCache(),
        attempts=AttemptController(max_attempts_from_env()),
    )
    if mode == "env":
        return EnvRetriever(fallback=prompt)
    return prompt


__all__ = [
    "BaseRetriever",
    "PassphraseResult",
    "PromptRetriever",
    "EnvRetriever",
    "ConstantRetriever",
    "retriever_factory",
]
