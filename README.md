# gitinner

Building blocks for a Git hosting server. The package provides the Git object
model, pkt-line framing, protocol capabilities, configuration, a metrics log
store, and the abstract storage interfaces that a server's backends implement.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Modules

- `gitinner.errors`: `GitInnerError`, raised throughout the package. It carries
  an `ErrorKind` in `kind` and an optional `detail`.
- `gitinner.pktline`: `write_pkt_line` (empty input gives the flush packet
  `b"0000"`), `bend_pkt_flush`, the `SideBand` channel numbers with
  `to_u32`/`from_u32`, and `CallBack`, a bounded asyncio queue with `send`,
  `send_pkt_line`, `send_side_pkt_line` and `receive`.
- `gitinner.capability`: `GitCapability` and `CapabilityKind`. Capabilities are
  parsed with `from_str`/`from_bytes` and formatted with `str()`. The `basic`,
  `upload` and `receive` class methods return the sets a server advertises.
- `gitinner.types`: `HashValue`, `HashVersion` (`SHA1`, `SHA256`, with `hash`
  and the all-zero `default`) and `ObjectType`.
- `gitinner.signature`: `Signature` and `SignatureType` for author, committer and
  tagger lines. `Signature.new` stamps the current time and the local UTC offset.
- `gitinner.blob`, `gitinner.commit`, `gitinner.tag`, `gitinner.tree`: `Blob`,
  `Commit`, `Tag` and `Tree`. Each has a `parse(data, version)` that computes the
  object id from the raw content. Blobs, tags and trees compare equal by id.
  Tree parsing reads 20-byte entry ids.
- `gitinner.delta`: `OfsDelta` and `RefDelta`. `OfsDelta.apply_delta` and
  `RefDelta.apply_git_delta` apply Git delta instructions to a base.
  `RefDelta.resolve` looks up the base, first among already resolved objects and
  then in an `OdbTransaction`, and applies the delta to it.
- `gitinner.odb`: the abstract async `Odb` and `OdbTransaction` interfaces.
- `gitinner.refs`: `RefItem` and the abstract async `RefsManager` interface.
- `gitinner.config`: `AppConfig`, `SshConfig` and `RpcConfig`. The configuration
  is stored as TOML at the path given by `config_path()`, which is `$CONFIG_FILE`
  or `config.toml` if that is not set. `AppConfig.load` writes and returns the
  default configuration when the file cannot be read. `AppConfig.cfg` loads the
  configuration once per process.
- `gitinner.logs`: `LogsStore`, an in-memory LRU of up to 100,000 records. Records
  pushed out of it are appended to `metrics.<YYYYmmdd-HHMM>.log` files, with a new
  file every minute. Files older than seven days are removed, and old files are
  also removed while the total exceeds 500 MiB. `LogsStore` can be used as a
  context manager.

## Examples

Framing a line for the wire:

```python
from gitinner.pktline import write_pkt_line

write_pkt_line("hello\n")   # b"000ahello\n"
write_pkt_line("")          # b"0000"
```

Parsing a commit:

```python
from gitinner.commit import Commit
from gitinner.types import HashVersion

raw = (
    b"tree 7551d4da2e9c1ae9397c47709253b405fb6b6206\n"
    b"author Alice <alice@example.com> 1740189120 +0800\n"
    b"committer Alice <alice@example.com> 1740189120 +0800\n"
    b"\n"
    b"Initial commit\n"
)
commit = Commit.parse(raw, HashVersion.SHA1)
print(commit.hash, commit.author.name, commit.message)
```

Capabilities:

```python
from gitinner.capability import GitCapability

cap = GitCapability.from_str("symref=HEAD:refs/heads/main")
str(cap)                                  # "symref=HEAD:refs/heads/main"
[str(c) for c in GitCapability.upload()]
```

Handling errors:

```python
from gitinner.errors import ErrorKind, GitInnerError

try:
    Commit.parse(b"tree 7551d4da2e9c1ae9397c47709253b405fb6b6206\n\nmsg\n", HashVersion.SHA1)
except GitInnerError as err:
    assert err.kind is ErrorKind.MISSING_AUTHOR
```

## What this package does not do

- It has no HTTP, SSH or RPC server and no command-line program. Nothing here
  serves `info/refs`, `git-upload-pack` or `git-receive-pack`.
- It has no storage backend. `Odb`, `OdbTransaction` and `RefsManager` are
  abstract, and you supply the implementations.
- It does no authentication or access control.
- It does not read or write whole pack files. Only the delta objects and the
  delta application step are provided.