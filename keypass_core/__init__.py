"""
keypass_core
============
Passphrase retrieval for content-trust signing keys.

Provides:
- Canonical/delegation role classification
- Prompt rendering and composite key-name parsing
- In-memory per-session passphrase cache
- Interactive, environment and constant retrievers (see keypass_core.retriever)
- A passphrase-protected Ed25519 key store that drives the retry loop
"""

from keypass_core.retriever import (
    PassphraseResult,
    PromptRetriever,
    retriever_factory,
)

__all__ = ["PassphraseResult", "PromptRetriever", "retriever_factory"]
