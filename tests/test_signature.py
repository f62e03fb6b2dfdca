import re
import time

import pytest

from gitinner.errors import ErrorKind, GitInnerError
from gitinner.signature import Signature, SignatureType

LINE = b"author Test <test@example.com> 1740189120 +0800"


def test_parse_fields():
    sig = Signature.from_data(LINE)
    assert sig.signature_type is SignatureType.AUTHOR
    assert sig.name == "Test"
    assert sig.email == "test@example.com"
    assert sig.timestamp == 1740189120
    assert sig.timezone == "+0800"


def test_str_omits_type():
    assert str(Signature.from_data(LINE)) == "Test <test@example.com> 1740189120 +0800"


def test_to_data_round_trip():
    sig = Signature.from_data(b"committer Jane Doe <jane@example.com> 1751768083 -0500")
    assert sig.name == "Jane Doe"
    assert Signature.from_data(sig.to_data()) == sig
    assert sig.to_data() == b"committer Jane Doe <jane@example.com> 1751768083 -0500"


def test_default_signature():
    sig = Signature()
    assert sig.signature_type is SignatureType.AUTHOR
    assert (sig.name, sig.email, sig.timestamp, sig.timezone) == ("", "", 0, "")


@pytest.mark.parametrize("kind", list(SignatureType))
def test_signature_type_round_trip(kind):
    assert SignatureType.from_str(str(kind)) is kind
    assert SignatureType.from_data(kind.to_bytes()) is kind


def test_unknown_signature_type():
    with pytest.raises(GitInnerError) as info:
        Signature.from_data(b"bogus Test <test@example.com> 1 +0000")
    assert info.value == GitInnerError(ErrorKind.INVALID_SIGNATURE_TYPE, "bogus")


def test_invalid_utf8_type():
    with pytest.raises(GitInnerError) as info:
        SignatureType.from_data(b"\xff\xfe")
    assert info.value.kind is ErrorKind.CONVERSION_ERROR


@pytest.mark.parametrize(
    "data",
    [b"author", b"author Test test@example.com 1 +0000", b"author Test <test@example.com>"],
)
def test_malformed_signature(data):
    with pytest.raises(GitInnerError) as info:
        Signature.from_data(data)
    assert info.value.kind is ErrorKind.INVALID_SIGNATURE


def test_bad_timestamp():
    with pytest.raises(GitInnerError) as info:
        Signature.from_data(b"author Test <test@example.com> soon +0000")
    assert info.value.kind is ErrorKind.INVALID_TIMESTAMP


def test_new_uses_current_time():
    sig = Signature.new(SignatureType.TAGGER, "Test", "test@example.com")
    assert sig.signature_type is SignatureType.TAGGER
    assert abs(sig.timestamp - time.time()) < 60
    assert re.fullmatch(r"[+-]\d{4}", sig.timezone)
    assert Signature.from_data(sig.to_data()) == sig