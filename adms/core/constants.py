"""Core constants: lookup tables and field limits shared by the rule sets.

Single source of truth for allowed values (extensions, MIME types,
activity names) and reserved words. Rule primitives treat these as pure
lookup tables; nothing mutates them.
"""

from types import MappingProxyType

# Field length limits
FILE_NAME_MIN_LENGTH = 1
FILE_NAME_MAX_LENGTH = 128
EXTENSION_MIN_LENGTH = 2  # at least ".x"
EXTENSION_MAX_LENGTH = 10
MIME_TYPE_MAX_LENGTH = 128
CHECKSUM_MAX_LENGTH = 128
MATTER_DESCRIPTION_MIN_LENGTH = 3
MATTER_DESCRIPTION_MAX_LENGTH = 128
USER_NAME_MIN_LENGTH = 2
USER_NAME_MAX_LENGTH = 50
ACTIVITY_MIN_LENGTH = 2
ACTIVITY_MAX_LENGTH = 50
REVISION_NUMBER_MIN = 1
REVISION_NUMBER_MAX = 999_999

# Accepted digest lengths: SHA-256 and SHA-512 hex strings
CHECKSUM_DIGEST_LENGTHS: frozenset[int] = frozenset({64, 128})

# Extension -> accepted MIME types (legal document formats, spreadsheets,
# exhibit images, bundles)
EXTENSION_MIME_TYPES: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        ".pdf": ("application/pdf",),
        ".docx": (
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        ),
        ".doc": ("application/msword",),
        ".txt": ("text/plain",),
        ".rtf": ("application/rtf", "text/rtf"),
        ".xlsx": (
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        ),
        ".xls": ("application/vnd.ms-excel",),
        ".csv": ("text/csv", "application/csv"),
        ".jpg": ("image/jpeg",),
        ".jpeg": ("image/jpeg",),
        ".png": ("image/png",),
        ".tiff": ("image/tiff",),
        ".tif": ("image/tiff",),
        ".bmp": ("image/bmp",),
        ".gif": ("image/gif",),
        ".zip": ("application/zip",),
        ".rar": ("application/rar", "application/x-rar-compressed"),
    }
)

ALLOWED_EXTENSIONS: tuple[str, ...] = tuple(EXTENSION_MIME_TYPES)
ALLOWED_MIME_TYPES: frozenset[str] = frozenset(
    mime for mimes in EXTENSION_MIME_TYPES.values() for mime in mimes
)
LEGAL_DOCUMENT_EXTENSIONS: frozenset[str] = frozenset(
    {".pdf", ".docx", ".doc", ".rtf", ".txt"}
)

# Substrings that mark free text as carrying script or embedded content
SCRIPT_PATTERNS: tuple[str, ...] = (
    "<script",
    "javascript:",
    "vbscript:",
    "<object",
    "<embed",
    "<iframe",
)

# File names are also rejected for data URIs and executable extensions
UNSAFE_NAME_PATTERNS: tuple[str, ...] = (
    *SCRIPT_PATTERNS,
    "data:",
    "blob:",
    "eval(",
    "alert(",
    ".exe",
    ".bat",
    ".cmd",
    ".com",
    ".pif",
    ".scr",
    ".vbs",
    ".js",
)

# Reserved words
RESERVED_USER_NAMES: frozenset[str] = frozenset(
    {"system", "admin", "root", "null", "undefined"}
)
RESERVED_MATTER_DESCRIPTIONS: frozenset[str] = frozenset(
    {
        "system", "admin", "administrator", "root", "sa", "default",
        "matter", "document", "file", "folder", "directory",
        "court", "judge", "clerk", "registry", "docket",
        "adms", "database", "backup", "temp", "temporary", "test",
        "null", "undefined", "none", "empty", "void", "unknown",
        "security", "auth", "authentication", "token", "session",
        "new", "copy", "duplicate", "sample", "example",
    }
)
PLACEHOLDER_PHRASES: tuple[str, ...] = (
    "lorem ipsum",
    "tbd",
    "todo",
    "placeholder",
    "xxx",
    "to be determined",
)

# Activity vocabularies
DOCUMENT_ACTIVITIES: frozenset[str] = frozenset(
    {"CHECKED IN", "CHECKED OUT", "CREATED", "DELETED", "RESTORED", "SAVED"}
)
MATTER_ACTIVITIES: frozenset[str] = frozenset(
    {"CREATED", "ARCHIVED", "DELETED", "RESTORED", "UNARCHIVED", "VIEWED"}
)
REVISION_ACTIVITIES: frozenset[str] = frozenset(
    {"CREATED", "SAVED", "DELETED", "RESTORED"}
)
TRANSFER_ACTIVITIES: frozenset[str] = frozenset({"MOVED", "COPIED"})
CREATED_ACTIVITY = "CREATED"
