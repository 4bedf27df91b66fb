"""File-type classification and code-fence language tags."""

from __future__ import annotations

CODE_EXTENSIONS: dict[str, str] = {
    "js": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "py": "python",
    "rb": "ruby",
    "java": "java",
    "c": "c",
    "cpp": "cpp",
    "cs": "csharp",
    "go": "go",
    "rs": "rust",
    "php": "php",
    "swift": "swift",
    "kt": "kotlin",
    "scala": "scala",
    "dart": "dart",
    "sh": "bash",
    "bat": "batch",
    "ps1": "powershell",
    "sql": "sql",
    "r": "r",
    "m": "matlab",
    "pl": "perl",
    "lua": "lua",
    "ex": "elixir",
    "exs": "elixir",
    "erl": "erlang",
    "clj": "clojure",
    "hs": "haskell",
    "fs": "fsharp",
    "ml": "ocaml",
    "groovy": "groovy",
    "jl": "julia",
}

MARKUP_EXTENSIONS: dict[str, str] = {
    "html": "html",
    "htm": "html",
    "xml": "xml",
    "css": "css",
    "scss": "scss",
    "sass": "sass",
    "less": "less",
    "svg": "svg",
    "md": "markdown",
    "markdown": "markdown",
    "json": "json",
    "yaml": "yaml",
    "yml": "yaml",
    "toml": "toml",
}

DOCUMENT_EXTENSIONS: dict[str, str] = {
    "txt": "text",
    "pdf": "pdf",
    "doc": "word",
    "docx": "word",
    "xls": "excel",
    "xlsx": "excel",
    "ppt": "powerpoint",
    "pptx": "powerpoint",
    "odt": "openoffice",
    "ods": "openoffice",
    "odp": "openoffice",
}

IMAGE_EXTENSIONS: dict[str, str] = {
    ext: "image" for ext in ("jpg", "jpeg", "png", "gif", "bmp", "tiff", "webp", "ico")
}

BINARY_EXTENSIONS: dict[str, str] = {
    "zip": "archive",
    "rar": "archive",
    "tar": "archive",
    "gz": "archive",
    "7z": "archive",
    "exe": "executable",
    "dll": "binary",
    "so": "binary",
    "a": "binary",
    "o": "binary",
    "class": "binary",
    "jar": "binary",
    "war": "binary",
    "ear": "binary",
}

CONFIG_EXTENSIONS: dict[str, str] = {
    ext: "config" for ext in ("ini", "conf", "cfg", "config", "env")
}

# Checked in order against the end of the path, before extensions.
SPECIAL_FILE_SUFFIXES: tuple[tuple[str, str], ...] = (
    ("package.json", "package-json"),
    ("tsconfig.json", "tsconfig"),
    (".gitignore", "gitignore"),
    (".GithubDocsignore", "githubdocsignore"),
    ("Dockerfile", "dockerfile"),
    ("docker-compose.yml", "docker-compose"),
    ("docker-compose.yaml", "docker-compose"),
    ("Makefile", "makefile"),
    ("README.md", "readme"),
    ("LICENSE", "license"),
)

EXTENSION_TABLES: tuple[dict[str, str], ...] = (
    CODE_EXTENSIONS,
    MARKUP_EXTENSIONS,
    DOCUMENT_EXTENSIONS,
    IMAGE_EXTENSIONS,
    BINARY_EXTENSIONS,
    CONFIG_EXTENSIONS,
)

FENCE_LANGUAGES: frozenset[str] = frozenset(
    {"javascript", "typescript", "python", "html", "css", "json", "markdown", "yaml"}
)


def file_type(path: str) -> str:
    """Classify ``path`` by special file name, then by extension."""
    for suffix, kind in SPECIAL_FILE_SUFFIXES:
        if path.endswith(suffix):
            return kind
    extension = path.rsplit(".", 1)[-1].lower()
    for table in EXTENSION_TABLES:
        kind = table.get(extension)
        if kind is not None:
            return kind
    return "unknown"


def fence_language(path: str) -> str:
    """Return the code-fence tag for ``path``, or ``""`` when none applies."""
    kind = file_type(path)
    return kind if kind in FENCE_LANGUAGES else ""


__all__ = [
    "FENCE_LANGUAGES",
    "file_type",
    "fence_language",
]
