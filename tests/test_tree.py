import pytest

from gitinner.errors import ErrorKind, GitInnerError
from gitinner.tree import Tree, TreeItem, TreeItemMode
from gitinner.types import HashValue, HashVersion, ObjectType

ID_A = bytes(range(20))
ID_B = bytes(range(20, 40))


def entry(mode: bytes, name: bytes, digest: bytes) -> bytes:
    return mode + b" " + name + b"\0" + digest


def test_empty_tree_has_well_known_id():
    tree = Tree.parse(b"", HashVersion.SHA1)
    assert str(tree.id) == "4b825dc642cb6eb9a060e54bf8d69288fbee4904"
    assert tree.tree_items == ()
    assert tree.size() == 0


def test_parse_entries():
    data = entry(b"100644", b"hello.txt", ID_A) + entry(b"40000", b"src", ID_B)
    tree = Tree.parse(data, HashVersion.SHA1)
    assert tree.tree_items == (
        TreeItem(TreeItemMode.BLOB, HashValue(ID_A), "hello.txt"),
        TreeItem(TreeItemMode.TREE, HashValue(ID_B), "src"),
    )
    assert tree.object_type() is ObjectType.TREE


def test_data_round_trip_and_size():
    data = (
        entry(b"100644", b"a", ID_A)
        + entry(b"100755", b"run.sh", ID_B)
        + entry(b"120000", b"link", ID_A)
        + entry(b"160000", b"sub", ID_B)
    )
    tree = Tree.parse(data, HashVersion.SHA1)
    assert tree.data() == data
    assert tree.size() == len(data)
    assert Tree.parse(tree.data(), HashVersion.SHA1).id == tree.id


def test_legacy_tree_mode_is_normalised():
    tree = Tree.parse(entry(b"040000", b"dir", ID_A), HashVersion.SHA1)
    assert tree.tree_items[0].mode is TreeItemMode.TREE
    assert tree.data() == entry(b"40000", b"dir", ID_A)


def test_id_depends_on_algorithm():
    data = entry(b"100644", b"x", ID_A)
    sha1 = Tree.parse(data, HashVersion.SHA1)
    sha256 = Tree.parse(data, HashVersion.SHA256)
    assert len(sha1.id.raw) == 20
    assert len(sha256.id.raw) == 32


def test_display():
    tree = Tree.parse(
        entry(b"100755", b"run.sh", ID_A) + entry(b"40000", b"src", ID_B), HashVersion.SHA1
    )
    assert str(tree) == (
        f"100755 blob {ID_A.hex()}\trun.sh\n" f"40000 tree {ID_B.hex()}\tsrc\n"
    )


def test_item_display():
    item = TreeItem(TreeItemMode.BLOB_EXECUTABLE, HashValue(ID_A), "run.sh")
    assert str(item) == f"blob executable run.sh {ID_A.hex()}"


def test_trees_compare_by_id():
    data = entry(b"100644", b"a", ID_A)
    assert Tree.parse(data, HashVersion.SHA1) == Tree.parse(data, HashVersion.SHA1)
    assert Tree.parse(data, HashVersion.SHA1) != Tree.parse(b"", HashVersion.SHA1)


@pytest.mark.parametrize(
    "mode, expected",
    [
        (b"100644", TreeItemMode.BLOB),
        (b"100664", TreeItemMode.BLOB),
        (b"100640", TreeItemMode.BLOB),
        (b"100755", TreeItemMode.BLOB_EXECUTABLE),
        (b"120000", TreeItemMode.LINK),
        (b"160000", TreeItemMode.COMMIT),
        (b"040000", TreeItemMode.TREE),
        (b"40000", TreeItemMode.TREE),
    ],
)
def test_mode_from_bytes(mode, expected):
    assert TreeItemMode.from_bytes(mode) is expected


@pytest.mark.parametrize("mode", list(TreeItemMode))
def test_mode_bytes_round_trip(mode):
    assert TreeItemMode.from_bytes(mode.to_bytes()) is mode
    assert mode.to_str() == mode.to_bytes().decode()


def test_mode_display():
    assert str(TreeItemMode.BLOB_EXECUTABLE) == "blob executable"
    assert TreeItemMode.TREE.to_bytes() == b"40000"


def test_invalid_mode():
    with pytest.raises(GitInnerError) as info:
        TreeItemMode.from_bytes(b"777777")
    assert info.value == GitInnerError(ErrorKind.INVALID_TREE_ITEM, "777777")


def test_item_to_data_accepts_hex_encoded_id():
    item = TreeItem(TreeItemMode.BLOB, HashValue(ID_A.hex().encode()), "a")
    assert item.to_data() == entry(b"100644", b"a", ID_A)


def test_item_to_data_rejects_odd_length():
    item = TreeItem(TreeItemMode.BLOB, HashValue(b"abc"), "a")
    with pytest.raises(GitInnerError) as info:
        item.to_data()
    assert info.value.kind is ErrorKind.INVALID_HASH


@pytest.mark.parametrize(
    "data, detail",
    [
        (b"100644", "Missing space after mode"),
        (b"100644 name-without-null", "Missing null after filename"),
        (b"100644 a\0" + bytes(5), "Tree item hash truncated"),
        (b"100644 \xff\xfe\0" + ID_A, "Filename not UTF-8"),
    ],
)
def test_parse_errors(data, detail):
    with pytest.raises(GitInnerError) as info:
        Tree.parse(data, HashVersion.SHA1)
    assert info.value == GitInnerError(ErrorKind.INVALID_TREE_ITEM, detail)