"""Error kinds raised throughout the package."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Every failure the package can report."""

    INVALID_SHA1_STRING = "InvalidSha1String"
    INVALID_SHA256_STRING = "InvalidSha256String"
    MISSING_BASE_OBJECT = "MissingBaseObject"
    DELTA_BASE_SIZE_MISMATCH = "DeltaBaseSizeMismatch"
    DELTA_INVALID_INSTRUCTION = "DeltaInvalidInstruction"
    DELTA_RESULT_SIZE_MISMATCH = "DeltaResultSizeMismatch"
    UNEXPECTED_EOF = "UnexpectedEof"
    INVALID_UTF8 = "InvalidUtf8"
    INVALID_DATA = "InvalidData"
    CONVERSION_ERROR = "ConversionError"
    INVALID_SIGNATURE_TYPE = "InvalidSignatureType"
    INVALID_SIGNATURE = "InvalidSignature"
    INVALID_TIMESTAMP = "InvalidTimestamp"
    MONGODB_ERROR = "MongodbError"
    DEFAULT_BRANCH_CANNOT_BE_DELETED = "DefaultBranchCannotBeDeleted"
    BSON_ERROR = "BsonError"
    OBJECT_NOT_FOUND = "ObjectNotFound"
    MISSING_FIELD = "MissingField"
    INVALID_TREE_ITEM = "InvalidTreeItem"
    INVALID_DELTA = "InvalidDelta"
    MISSING_AUTHOR = "MissingAuthor"
    MISSING_COMMITTER = "MissingCommitter"
    OBJECT_STORE_ERROR = "ObjectStoreError"
    HASH_VERSION_ERROR = "HashVersionError"
    UUID_ERROR = "UuidError"
    TREE_PARSE_ERROR = "TreeParseError"
    TAG_PARSE_ERROR = "TagParseError"
    COMMIT_PARSE_ERROR = "CommitParseError"
    NOT_SUPPORT_VERSION = "NotSupportVersion"
    DECOMPRESSION_ERROR = "DecompressionError"
    UNSUPPORTED_OFS_DELTA = "UnsupportedOfsDelta"
    INVALID_HASH = "InvalidHash"
    UNSUPPORTED_VERSION = "UnsupportedVersion"
    ZLIB_ERROR = "ZlibError"
    PAYLOAD = "Payload"
    NOT_SUPPORT_COMMAND = "NotSupportCommand"
    OTHER = "Other"
    SSH_ERROR = "SshError"
    SSH_SERVER_START_ERROR = "SshServerStartError"
    APP_INIT_ERROR = "AppInitError"
    APP_NOT_INIT = "AppNotInit"


class GitInnerError(Exception):
    """An error of a given kind, optionally carrying a detail value."""

    def __init__(self, kind: ErrorKind, detail: Any = None) -> None:
        super().__init__(kind, detail)
        self.kind = kind
        self.detail = detail

    def __str__(self) -> str:
        if self.detail is None:
            return self.kind.value
        return f"{self.kind.value}: {self.detail}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GitInnerError):
            return NotImplemented
        return self.kind == other.kind and self.detail == other.detail

    def __hash__(self) -> int:
        return hash((self.kind, str(self.detail)))