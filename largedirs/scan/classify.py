"""Extension-based content categories for type-composition reporting."""

from __future__ import annotations

IMAGE = "Image"
VIDEO = "Video"
AUDIO = "Audio"
ARCHIVE = "Archive"
DOCUMENT = "Document"
APPLICATION = "Application"
CODE = "Code"
LOG = "Log"
DATABASE = "Database"
BACKUP = "Backup"
DISK_IMAGE = "Disk Image"
CONFIGURATION = "Configuration"
FONT = "Font"
WEB = "Web"
SPREADSHEET = "Spreadsheet"
PRESENTATION = "Presentation"
OTHER = "Other"

CATEGORIES: tuple[str, ...] = (
    IMAGE,
    VIDEO,
    AUDIO,
    ARCHIVE,
    DOCUMENT,
    APPLICATION,
    CODE,
    LOG,
    DATABASE,
    BACKUP,
    DISK_IMAGE,
    CONFIGURATION,
    FONT,
    WEB,
    SPREADSHEET,
    PRESENTATION,
    OTHER,
)

_EXTENSIONS_BY_CATEGORY: dict[str, tuple[str, ...]] = {
    IMAGE: (".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tiff", ".raw", ".webp", ".heic", ".heif"),
    VIDEO: (".mp4", ".mov", ".avi", ".mkv", ".flv", ".wmv", ".webm", ".m4v"),
    AUDIO: (".mp3", ".wav", ".flac", ".aac", ".ogg", ".m4a", ".wma"),
    ARCHIVE: (".zip", ".rar", ".7z", ".tar", ".gz", ".bz2", ".xz"),
    DOCUMENT: (".pdf", ".doc", ".docx", ".txt", ".rtf"),
    APPLICATION: (".exe", ".dll", ".so", ".bin", ".dmg", ".pkg", ".apk"),
    CODE: (".go", ".c", ".cpp", ".h", ".hpp", ".js", ".ts", ".py", ".java", ".sh", ".rb", ".php"),
    LOG: (".log", ".trace", ".dump", ".log.gz", ".log.bz2"),
    DATABASE: (".sql", ".db", ".sqlite", ".sqlite3", ".mdb", ".accdb", ".ndb", ".frm", ".ibd"),
    BACKUP: (".bak", ".backup", ".bkp", ".ab"),
    DISK_IMAGE: (".iso", ".img", ".vhd", ".vhdx", ".vmdk", ".dsk"),
    CONFIGURATION: (".conf", ".cfg", ".ini", ".yaml", ".yml", ".json", ".xml", ".toml"),
    FONT: (".ttf", ".otf", ".woff", ".woff2", ".eot"),
    WEB: (".html", ".htm", ".css", ".scss", ".less"),
    SPREADSHEET: (".ods", ".xls", ".xlsx", ".csv"),
    PRESENTATION: (".odp", ".ppt", ".pptx"),
}

CATEGORY_BY_EXTENSION: dict[str, str] = {
    extension: category
    for category, extensions in _EXTENSIONS_BY_CATEGORY.items()
    for extension in extensions
}


def _suffixes(name: str) -> tuple[str, str]:
    """Return ``(double_suffix, last_suffix)`` for a lower-cased file name."""
    stem, dot, last = name.rpartition(".")
    if not dot or not stem:
        return "", ""
    inner_stem, inner_dot, inner = stem.rpartition(".")
    double = f".{inner}.{last}" if inner_dot and inner_stem else ""
    return double, f".{last}"


def classify(file_name: str) -> str:
    """Map ``file_name`` to a content category; unknown extensions are ``Other``.

    Matching is case-insensitive. Compound suffixes such as ``.log.gz`` win over
    their last component so rotated logs count as logs, not archives.
    """
    double, last = _suffixes(file_name.lower())
    if double and double in CATEGORY_BY_EXTENSION:
        return CATEGORY_BY_EXTENSION[double]
    return CATEGORY_BY_EXTENSION.get(last, OTHER)


__all__ = [
    "CATEGORIES",
    "CATEGORY_BY_EXTENSION",
    "OTHER",
    "classify",
]
