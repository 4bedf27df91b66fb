"""Ignore-rule parsing and gitignore-style matching.

The same matcher serves two rule files: path rules (which entries appear in
the tree) and line rules (which content lines are dropped from documents).
Rules fold left to right, so a later rule always overrides an earlier verdict.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from .errors import InputError

LOCK_FILE_NAME = "package-lock.json"
PATTERN_CACHE_MAX = 1024

# Directory rules are bare names, so each matches that directory at any depth.
DEFAULT_PATH_RULES_TEXT = """\
# Byte-compiled / optimized / DLL files
__pycache__
*.pyc
*.pyo
*.pyd
*$py.class

# C extensions
*.so

# Distribution / packaging
.Python

# Node.js dependencies
package-lock.json
node_modules

build
develop-eggs
dist
downloads
eggs
.eggs
lib
lib64
parts
sdist
var
wheels
share/python-wheels
*.egg-info
.installed.cfg
*.egg
MANIFEST

# PyInstaller
*.manifest
*.spec

# Installer logs
pip-log.txt
pip-delete-this-directory.txt

# Unit test / coverage reports
htmlcov
.tox
.nox
.coverage
.coverage.*
.cache
nosetests.xml
coverage.xml
*.cover
*.py,cover
.hypothesis
.pytest_cache
cover

# Translations
*.mo
*.pot

# Django stuff
*.log
local_settings.py
db.sqlite3
db.sqlite3-journal

# Flask stuff
instance
.webassets-cache

# Scrapy stuff
.scrapy

# Sphinx documentation
docs/_build

# PyBuilder
.pybuilder
target

# Jupyter Notebook
.ipynb_checkpoints

# IPython
profile_default
ipython_config.py

# pdm
.pdm.toml

# PEP 582
__pypackages__

# Celery stuff
celerybeat-schedule
celerybeat.pid

# SageMath parsed files
*.sage.py

# Environments
.env
.venv
env
venv
ENV
env.bak
venv.bak

# Spyder project settings
.spyderproject
.spyproject

# Rope project settings
.ropeproject

# mypy
.mypy_cache
.dmypy.json
dmypy.json

# Pyre type checker
.pyre

# pytype static type analyzer
.pytype

# Cython debug symbols
cython_debug

SourceSageAssets

.git
.CodeLumiaignore
.gitattributes
.gitignore
LICENSE
.github
*.png
*.jpg
*.ipynb
*.sqlite
requirements.txt
LICENSE*
*.zip
environment.yml
*.svg
*.jpeg
*.gif
"""


@dataclass(frozen=True)
class Rule:
    """One parsed rule line; ``negated`` rules re-include what earlier rules dropped."""

    raw: str
    negated: bool = False

    @property
    def pattern(self) -> str:
        """Pattern text with the leading ``!`` removed for negated rules."""
        return self.raw[1:] if self.negated else self.raw

    @property
    def is_comment(self) -> bool:
        return not self.raw.strip() or self.raw.startswith("#")


def parse_rule(line: str) -> Rule | None:
    """Parse one rule-file line, returning ``None`` for blanks and comments."""
    line = line.rstrip("\r")
    if not line.strip() or line.startswith("#"):
        return None
    return Rule(raw=line, negated=line.startswith("!"))


def parse_rules(source: str | Iterable[str]) -> list[Rule]:
    """Parse rule text (or an iterable of lines) into an ordered rule list."""
    lines = source.split("\n") if isinstance(source, str) else source
    rules: list[Rule] = []
    for line in lines:
        rule = parse_rule(line)
        if rule is not None:
            rules.append(rule)
    return rules


def load_rules_file(path: Path) -> list[Rule]:
    """Read and parse a UTF-8 rule file, tolerating a leading byte-order mark.

    Raises ``InputError`` when the file is missing or cannot be decoded.
    """
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"cannot read rule file {path}: {exc}") from exc
    return parse_rules(text)


def default_path_rules() -> list[Rule]:
    return parse_rules(DEFAULT_PATH_RULES_TEXT)


def _basename(candidate: str) -> str:
    return candidate.rsplit("/", 1)[-1]


@lru_cache(maxsize=PATTERN_CACHE_MAX)
def _compile_pattern(pattern: str) -> re.Pattern[str]:
    """Translate ``*``/``?`` wildcards into an anchored regex.

    Every other character is literal, so any string is a valid pattern.
    """
    parts: list[str] = []
    for ch in pattern:
        if ch == "*":
            parts.append(".*")
        elif ch == "?":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return re.compile("".join(parts), re.DOTALL)


def matches(rule: Rule, candidate: str) -> bool:
    """Return whether ``rule``'s pattern matches ``candidate``.

    Checks the full candidate, then its basename, then the wildcard form
    against both.
    """
    pattern = rule.pattern
    if not pattern:
        return False
    if pattern == candidate:
        return True
    basename = _basename(candidate)
    if pattern == basename:
        return True
    compiled = _compile_pattern(pattern)
    return compiled.fullmatch(candidate) is not None or compiled.fullmatch(basename) is not None


def is_ignored(candidate: str, rules: Sequence[Rule]) -> bool:
    """Fold ``rules`` over ``candidate`` and return the final verdict.

    A basename equal to ``package-lock.json`` is always ignored, even when a
    negated rule names it.
    """
    if _basename(candidate) == LOCK_FILE_NAME:
        return True

    ignored = False
    for rule in rules:
        if rule.is_comment:
            continue
        if matches(rule, candidate):
            ignored = not rule.negated
    return ignored


def filter_lines(text: str, rules: Sequence[Rule]) -> str:
    """Drop every line of ``text`` ignored by ``rules``, keeping survivor order."""
    if not rules:
        return text
    kept = [line for line in text.split("\n") if not is_ignored(line, rules)]
    return "\n".join(kept)


__all__ = [
    "LOCK_FILE_NAME",
    "DEFAULT_PATH_RULES_TEXT",
    "Rule",
    "parse_rule",
    "parse_rules",
    "load_rules_file",
    "default_path_rules",
    "matches",
    "is_ignored",
    "filter_lines",
]
