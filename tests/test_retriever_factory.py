import io
import pytest
from keypass_core.retriever import (
    retriever_factory, PromptRetriever, EnvRetriever, ConstantRetriever,
)
from keypass_core.errors import PassphraseUnavailableError, UnknownRoleError

KEY = "repo/0123456789abcdef"

# CMD Line Usage: pytest -v -s --log-cli-level=DEBUG ./tests/test_retriever_factory.py


def test_retriever_factory_modes(monkeypatch):
    """Verify that retriever_factory returns the right retriever per KEYPASS_RETRIEVER."""
    # Prompt mode (default)
    monkeypatch.delenv("KEYPASS_RETRIEVER", raising=False)
    monkeypatch.delenv("KEYPASS_MAX_ATTEMPTS", raising=False)
    assert isinstance(retriever_factory(), PromptRetriever)

    # Env mode wraps a prompt fallback
    monkeypatch.setenv("KEYPASS_RETRIEVER", "env")
    r = retriever_factory()
    assert isinstance(r, EnvRetriever)
    assert isinstance(r.fallback, PromptRetriever)

    # Constant mode
    monkeypatch.setenv("KEYPASS_RETRIEVER", "constant")
    monkeypatch.setenv("KEYPASS_PASSPHRASE", "hunter22")
    r = retriever_factory()
    assert isinstance(r, ConstantRetriever)
    assert r.retrieve(KEY, "root") == ("hunter22", False)


def test_retriever_factory_rejects_bad_config(monkeypatch):
    monkeypatch.delenv("KEYPASS_PASSPHRASE", raising=False)
    with pytest.raises(ValueError):
        retriever_factory("constant")
    with pytest.raises(ValueError):
        retriever_factory("keychain")


def test_retriever_factory_max_attempts(monkeypatch):
    monkeypatch.setenv("KEYPASS_MAX_ATTEMPTS", "2")
    out = io.StringIO()
    r = retriever_factory("prompt", in_stream=io.StringIO("pw\n"), out_stream=out)
    assert r.retrieve(KEY, "root", False, 2) == ("", True)
    assert r.retrieve(KEY, "root", False, 1) == ("pw", False)


def test_env_retriever_reads_role_variables():
    environ = {
        "KEYPASS_ROOT_PASSPHRASE": "rootpw",
        "KEYPASS_DELEGATION_PASSPHRASE": "delegpw",
    }
    r = EnvRetriever(environ=environ)

    assert r.retrieve(KEY, "root") == ("rootpw", False)
    assert r.retrieve(KEY, "targets/releases") == ("delegpw", False)
    # a rejected env value would be offered again, so give up
    assert r.retrieve(KEY, "root", False, 1) == ("", True)

    with pytest.raises(PassphraseUnavailableError):
        r.retrieve(KEY, "snapshot")


def test_env_retriever_falls_back_to_prompt():
    out = io.StringIO()
    prompt = PromptRetriever(io.StringIO("snapshotpw\n"), out)
    r = EnvRetriever(fallback=prompt, environ={"KEYPASS_ROOT_PASSPHRASE": "rootpw"})

    assert r.retrieve(KEY, "root") == ("rootpw", False)
    assert out.getvalue() == ""
    assert r.retrieve(KEY, "snapshot") == ("snapshotpw", False)
    assert out.getvalue() == "Enter passphrase for snapshot key with ID 0123456 (repo): "


def test_constant_retriever_gives_up_on_retry():
    r = ConstantRetriever("pw")
    assert r(KEY, "targets/a", True, 0) == ("pw", False)
    assert r(KEY, "targets/a", False, 1) == ("", True)


def test_constant_retriever_rejects_unknown_role():
    with pytest.raises(UnknownRoleError):
        ConstantRetriever("pw").retrieve(KEY, "yubikey")
