"""Tests for Readwise token resolution."""

import os
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from readwise_sync.core.auth import (
    CredentialResolver,
    PasswordStoreBackend,
    StandardBackend,
    create_backend,
)
from readwise_sync.errors import AuthError
from readwise_sync.models.config import AuthSettings

from .helpers import FakeBackend


class TestCredentialResolver:
    """Tests for CredentialResolver."""

    def test_returns_plain_secret(self) -> None:
        backend = FakeBackend("tok123")
        resolver = CredentialResolver(AuthSettings(), backend=backend)

        assert resolver.get_token() == "tok123"
        assert backend.hosts == ["readwise.io"]

    def test_invokes_callable_secret(self) -> None:
        producer = MagicMock(return_value="deferred-token\n")
        resolver = CredentialResolver(backend=FakeBackend(producer))

        assert resolver.get_token() == "deferred-token"
        producer.assert_called_once_with()

    def test_missing_secret_raises(self) -> None:
        resolver = CredentialResolver(backend=FakeBackend(None))

        with pytest.raises(AuthError, match="No Readwise token found"):
            resolver.get_token()

    def test_empty_secret_raises(self) -> None:
        resolver = CredentialResolver(backend=FakeBackend(lambda: "  "))

        with pytest.raises(AuthError, match="Empty"):
            resolver.get_token()

    def test_not_cached_between_calls(self) -> None:
        backend = FakeBackend("tok")
        resolver = CredentialResolver(backend=backend)

        resolver.get_token()
        resolver.get_token()

        assert len(backend.hosts) == 2


class TestStandardBackend:
    """Tests for the env/authinfo backend."""

    def test_env_var(self, tmp_path: Path) -> None:
        backend = StandardBackend(authinfo_files=[str(tmp_path / "missing")])
        with patch.dict(os.environ, {"READWISE_TOKEN": "from-env"}, clear=True):
            assert backend.search("readwise.io") == "from-env"

    def test_authinfo_entry(self, tmp_path: Path) -> None:
        authinfo = tmp_path / "authinfo"
        authinfo.write_text(
            "machine example.com login a password other\n"
            "machine readwise.io login me password secret-token\n"
        )
        backend = StandardBackend(authinfo_files=[str(authinfo)])

        with patch.dict(os.environ, {}, clear=True):
            assert backend.search("readwise.io") == "secret-token"

    def test_no_matching_host(self, tmp_path: Path) -> None:
        authinfo = tmp_path / "authinfo"
        authinfo.write_text("machine example.com login a password other\n")
        backend = StandardBackend(authinfo_files=[str(authinfo)])

        with patch.dict(os.environ, {}, clear=True):
            assert backend.search("readwise.io") is None


class TestPasswordStoreBackend:
    """Tests for the pass backend."""

    def test_missing_entry(self, tmp_path: Path) -> None:
        backend = PasswordStoreBackend(store_dir=tmp_path)

        assert backend.search("readwise.io") is None

    def test_returns_deferred_producer(self, tmp_path: Path) -> None:
        (tmp_path / "readwise.io.gpg").write_bytes(b"")
        backend = PasswordStoreBackend(store_dir=tmp_path)

        completed = subprocess.CompletedProcess(
            args=["pass"], returncode=0, stdout="pass-token\nuser: me\n", stderr=""
        )
        with patch("readwise_sync.core.auth.subprocess.run", return_value=completed) as run:
            producer = backend.search("readwise.io")
            assert callable(producer)
            run.assert_not_called()

            assert producer() == "pass-token"
            run.assert_called_once()
            assert run.call_args.args[0] == ["pass", "show", "readwise.io"]

    def test_decrypt_failure_raises_auth_error(self, tmp_path: Path) -> None:
        (tmp_path / "readwise.io.gpg").write_bytes(b"")
        backend = PasswordStoreBackend(store_dir=tmp_path)

        error = subprocess.CalledProcessError(2, ["pass"])
        with patch("readwise_sync.core.auth.subprocess.run", side_effect=error):
            producer = backend.search("readwise.io")
            with pytest.raises(AuthError, match="Could not decrypt"):
                producer()


class TestCreateBackend:
    def test_selects_backend(self) -> None:
        assert isinstance(create_backend(AuthSettings()), StandardBackend)
        assert isinstance(
            create_backend(AuthSettings(backend="password-store")), PasswordStoreBackend
        )
