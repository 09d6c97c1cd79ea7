"""
Tests for the hashlib hashing adapter.
"""

from __future__ import annotations

import hashlib
import io
from pathlib import Path

import pytest

from udv.adapters import HashlibAdapter
from udv.core import ConfigError, ContentIdentity, UdvIOError


class FailingStream(io.RawIOBase):
    """Stream that returns one chunk and then fails."""

    def __init__(self) -> None:
        self.calls = 0

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        self.calls += 1
        if self.calls > 1:
            raise OSError("device unplugged")
        return b"partial"


class TestHashlibAdapter:
    """Test streaming digests."""

    def test_sha256_matches_hashlib(self, tmp_path: Path) -> None:
        """Test the default digest is SHA-256 of the exact bytes."""
        path = tmp_path / "file.txt"
        path.write_bytes(b"Test content\n")

        hasher = HashlibAdapter()

        assert hasher.algorithm == "sha256"
        assert hasher.digest(path) == hashlib.sha256(b"Test content\n").hexdigest()

    def test_digest_is_deterministic(self, tmp_path: Path) -> None:
        """Test identical bytes always give the same identity."""
        first = tmp_path / "a.bin"
        second = tmp_path / "b.bin"
        payload = bytes(range(256)) * 100
        first.write_bytes(payload)
        second.write_bytes(payload)

        hasher = HashlibAdapter()

        assert hasher.identity_of(first) == hasher.identity_of(first)
        assert hasher.identity_of(first) == hasher.identity_of(second)

    def test_large_file_streams_in_chunks(self, tmp_path: Path) -> None:
        """Test a file spanning many chunks hashes like the whole buffer."""
        payload = b"x" * (8192 * 5 + 17)
        path = tmp_path / "big.bin"
        path.write_bytes(payload)

        assert HashlibAdapter().digest(path) == hashlib.sha256(payload).hexdigest()

    def test_digest_stream(self) -> None:
        """Test hashing a binary stream."""
        identity = HashlibAdapter().identity_of(io.BytesIO(b"stream"))

        assert identity == ContentIdentity("sha256", hashlib.sha256(b"stream").hexdigest())

    def test_md5(self, tmp_path: Path) -> None:
        """Test md5 is selectable."""
        path = tmp_path / "file.txt"
        path.write_bytes(b"abc")

        identity = HashlibAdapter("md5").identity_of(path)

        assert identity.algorithm == "md5"
        assert identity.hexdigest == hashlib.md5(b"abc").hexdigest()

    def test_algorithm_name_is_normalised(self) -> None:
        """Test algorithm names are case-insensitive."""
        assert HashlibAdapter("SHA256").algorithm == "sha256"

    def test_unknown_algorithm(self) -> None:
        """Test unsupported algorithms are rejected."""
        with pytest.raises(ConfigError, match="Unsupported hash algorithm"):
            HashlibAdapter("crc32")

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test an unreadable file raises UdvIOError."""
        with pytest.raises(UdvIOError):
            HashlibAdapter().digest(tmp_path / "missing.bin")

    def test_read_failure_mid_stream(self) -> None:
        """Test a failing read discards the partial digest."""
        with pytest.raises(UdvIOError, match="mid-stream"):
            HashlibAdapter().digest_stream(FailingStream())


class TestContentIdentity:
    """Test the ContentIdentity model."""

    def test_shard_and_remainder(self) -> None:
        """Test the two-level split of the digest."""
        digest = hashlib.sha256(b"x").hexdigest()
        identity = ContentIdentity("sha256", digest)

        assert identity.shard == digest[:2]
        assert identity.remainder == digest[2:]
        assert identity.shard + identity.remainder == digest

    def test_rejects_wrong_length(self) -> None:
        """Test a digest must match its algorithm's length."""
        with pytest.raises(ValueError, match="expected 64"):
            ContentIdentity("sha256", "abcd")

    def test_rejects_uppercase(self) -> None:
        """Test digests are lowercase hex."""
        digest = hashlib.md5(b"x").hexdigest().upper()
        with pytest.raises(ValueError):
            ContentIdentity("md5", digest)
