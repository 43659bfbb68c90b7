# keypass_core/errors.py


class PassphraseError(Exception):
    pass


class NoPassphraseInputError(PassphraseError, EOFError):
    """Input stream reached end of data before a passphrase line was read."""


class PassphraseMismatchError(PassphraseError):
    """The confirmation entry for a new key did not match the first entry."""


class PassphraseUnavailableError(PassphraseError):
    """A non-interactive source has no passphrase for the requested role."""


class UnknownRoleError(PassphraseError, ValueError):
    pass


class TooManyAttemptsError(PassphraseError):
    """Raised by retry loops once the retriever has signalled give-up."""
