"""Tests for the digest engine."""
import hashlib
import io
from pathlib import Path

import pytest

from hashy.core.config import HashAlgorithm
from hashy.core.errors import ConfigurationError, FileOpenError, ReadError, UnsupportedFileError
from hashy.engines.digest import DigestEngine, create_digest_engine


class FailingStream(io.RawIOBase):
    """Returns one chunk and then fails like a bad disk."""

    def __init__(self):
        self._calls = 0

    def readable(self):
        return True

    def read(self, size=-1):
        self._calls += 1
        if self._calls == 1:
            return b"partial"
        raise OSError(5, "Input/output error")


class TestDigestEngine:
    """Tests for DigestEngine."""

    @pytest.fixture
    def engine(self):
        return DigestEngine()

    def test_default_is_md5(self, engine):
        assert engine.name == "md5"

    def test_known_md5(self, engine):
        assert engine.digest(io.BytesIO(b"hello")) == "5d41402abc4b2a76b9719d911017c592"
        assert engine.digest(io.BytesIO(b"world")) == "7d793037a0760186574b0282f2f435e7"

    def test_empty_stream(self, engine):
        assert engine.digest(io.BytesIO(b"")) == hashlib.md5(b"").hexdigest()

    @pytest.mark.parametrize("algorithm", list(HashAlgorithm))
    def test_matches_hashlib(self, algorithm):
        data = b"The quick brown fox" * 1000
        engine = DigestEngine(algorithm)
        assert engine.digest(io.BytesIO(data)) == hashlib.new(algorithm.value, data).hexdigest()

    @pytest.mark.parametrize(
        "algorithm,length",
        [
            (HashAlgorithm.md5, 32),
            (HashAlgorithm.sha1, 40),
            (HashAlgorithm.sha256, 64),
            (HashAlgorithm.sha512, 128),
        ],
    )
    def test_hex_length_and_case(self, algorithm, length):
        hex_digest = DigestEngine(algorithm).digest(io.BytesIO(b"data"))
        assert len(hex_digest) == length
        assert hex_digest == hex_digest.lower()

    def test_small_chunks_same_digest(self):
        data = bytes(range(256)) * 40
        small = DigestEngine(chunk_size=7)
        assert small.digest(io.BytesIO(data)) == hashlib.md5(data).hexdigest()

    def test_state_not_shared(self, engine):
        first = engine.digest(io.BytesIO(b"one"))
        engine.digest(io.BytesIO(b"two"))
        assert engine.digest(io.BytesIO(b"one")) == first

    def test_hash_file(self, engine, tmp_path: Path):
        path = tmp_path / "a"
        path.write_bytes(b"hello")
        result = engine.hash_file(str(path))
        assert result.path == str(path)
        assert result.digest == "5d41402abc4b2a76b9719d911017c592"

    def test_hash_missing_file(self, engine, tmp_path: Path):
        with pytest.raises(FileOpenError) as exc_info:
            engine.hash_file(str(tmp_path / "missing"))
        assert exc_info.value.fatal is False

    def test_hash_directory_is_unsupported(self, engine, tmp_path: Path):
        with pytest.raises(UnsupportedFileError):
            engine.hash_file(str(tmp_path))

    def test_read_failure_is_fatal(self, engine, tmp_path: Path, monkeypatch):
        path = tmp_path / "bad"
        path.write_bytes(b"x")
        monkeypatch.setattr("builtins.open", lambda *args, **kwargs: FailingStream())

        with pytest.raises(ReadError) as exc_info:
            engine.hash_file(str(path))
        assert exc_info.value.fatal is True
        assert exc_info.value.path == str(path)


class TestCreateDigestEngine:
    """Tests for the factory."""

    def test_from_name(self):
        assert create_digest_engine("sha256").name == "sha256"

    def test_from_enum(self):
        assert create_digest_engine(HashAlgorithm.sha1).name == "sha1"

    def test_unknown(self):
        with pytest.raises(ConfigurationError):
            create_digest_engine("whirlpool")
