import pytest

from gitinner.capability import CapabilityKind, GitCapability


def test_parse_simple_capabilities():
    assert GitCapability.from_str("multi_ack") == GitCapability(CapabilityKind.MULTI_ACK)
    assert GitCapability.from_str("thin-pack") == GitCapability(CapabilityKind.THIN_PACK)
    assert GitCapability.from_str("atomic") == GitCapability(CapabilityKind.ATOMIC)


def test_parse_agent():
    cap = GitCapability.from_str("agent=git/2.40.0")
    assert cap == GitCapability(CapabilityKind.AGENT, "git/2.40.0")


def test_parse_symref():
    cap = GitCapability.from_str("symref=HEAD:refs/heads/main")
    assert cap == GitCapability(CapabilityKind.SYMREF, "HEAD", "refs/heads/main")


def test_symref_without_colon_is_other():
    cap = GitCapability.from_str("symref=HEAD")
    assert cap == GitCapability(CapabilityKind.OTHER, "symref=HEAD")


def test_to_string():
    assert str(GitCapability(CapabilityKind.MULTI_ACK)) == "multi_ack"
    assert str(GitCapability(CapabilityKind.AGENT, "git/2.40.0")) == "agent=git/2.40.0"


@pytest.mark.parametrize(
    "text",
    ["side-band-64k", "report-status", "object-format=sha1", "symref=HEAD:refs/heads/main", "unknown-cap"],
)
def test_round_trip(text):
    assert str(GitCapability.from_str(text)) == text


def test_from_bytes():
    assert GitCapability.from_bytes(b"no-done") == GitCapability(CapabilityKind.NO_DONE)
    assert GitCapability.from_bytes(b"\xff\xfe") is None


def test_basic_upload_receive_sets():
    basic = GitCapability.basic()
    assert GitCapability(CapabilityKind.AGENT, "git-inner") in basic
    upload = GitCapability.upload()
    receive = GitCapability.receive()
    assert upload[: len(basic)] == basic
    assert receive[: len(basic)] == basic
    assert GitCapability(CapabilityKind.SHALLOW) in upload
    assert GitCapability(CapabilityKind.DELETE_REFS) in receive
    assert GitCapability(CapabilityKind.OFS_DELTA) not in upload