"""Unit tests for finding and rewriting the hash embedded in the executable."""

import hashlib

import pytest

from rtlfix.api.errors import AmbiguousMatchError, FormatError, IoError, NotFoundError
from rtlfix.api.integrity import EMBEDDED_HASH_MARKER, find_embedded_hash, rewrite_embedded_hash
from tests.conftest import EXE_PREFIX, EXE_SUFFIX, integrity_resource

pytestmark = pytest.mark.integrity

OLD = hashlib.sha256(b"original header").hexdigest()
NEW = hashlib.sha256(b"patched header").hexdigest()


@pytest.fixture
def exe(tmp_path):
    path = tmp_path / "claude.exe"
    path.write_bytes(EXE_PREFIX + integrity_resource(OLD) + EXE_SUFFIX)
    return path


def test_find_embedded_hash_reads_literal(tmp_path):
    """The 64 characters after the marker are returned."""
    path = tmp_path / "claude.exe"
    path.write_bytes(b'...[{"file":"resources\\\\app.asar","alg":"SHA256","value":"' + b"a" * 64 + b'"}]...')

    assert find_embedded_hash(path) == "a" * 64


def test_find_embedded_hash_in_binary_surroundings(exe):
    assert find_embedded_hash(exe) == OLD


def test_find_embedded_hash_rejects_uppercase(tmp_path):
    path = tmp_path / "claude.exe"
    path.write_bytes(EXE_PREFIX + integrity_resource(OLD.upper()) + EXE_SUFFIX)

    with pytest.raises(FormatError, match="hash is invalid"):
        find_embedded_hash(path)


def test_find_embedded_hash_rejects_truncated_value(tmp_path):
    path = tmp_path / "claude.exe"
    path.write_bytes(EXE_PREFIX + EMBEDDED_HASH_MARKER + b"abc123")

    with pytest.raises(FormatError):
        find_embedded_hash(path)


def test_find_embedded_hash_missing_marker(tmp_path):
    path = tmp_path / "claude.exe"
    path.write_bytes(EXE_PREFIX + EXE_SUFFIX)

    with pytest.raises(NotFoundError):
        find_embedded_hash(path)


def test_find_embedded_hash_unreadable(tmp_path):
    with pytest.raises(IoError):
        find_embedded_hash(tmp_path / "missing.exe")


def test_rewrite_embedded_hash_replaces_in_place(exe):
    before = exe.read_bytes()

    rewrite_embedded_hash(exe, OLD, NEW)

    after = exe.read_bytes()
    assert len(after) == len(before)
    assert find_embedded_hash(exe) == NEW
    assert OLD.encode() not in after
    assert after == before.replace(OLD.encode(), NEW.encode())


def test_rewrite_embedded_hash_same_value_is_noop(tmp_path):
    """Nothing is read or written when old equals new."""
    rewrite_embedded_hash(tmp_path / "does-not-exist.exe", OLD, OLD)


def test_rewrite_embedded_hash_ambiguous(tmp_path):
    path = tmp_path / "claude.exe"
    original = EXE_PREFIX + integrity_resource(OLD) + b"\x00" * 16 + OLD.encode() + EXE_SUFFIX
    path.write_bytes(original)

    with pytest.raises(AmbiguousMatchError):
        rewrite_embedded_hash(path, OLD, NEW)
    assert path.read_bytes() == original


def test_rewrite_embedded_hash_not_found(exe):
    other = hashlib.sha256(b"something else").hexdigest()
    before = exe.read_bytes()

    with pytest.raises(NotFoundError):
        rewrite_embedded_hash(exe, other, NEW)
    assert exe.read_bytes() == before


@pytest.mark.parametrize("bad", ["xyz", OLD.upper(), OLD[:-1]])
def test_rewrite_embedded_hash_rejects_bad_format(exe, bad):
    with pytest.raises(FormatError):
        rewrite_embedded_hash(exe, OLD, bad)
