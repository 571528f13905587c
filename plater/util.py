"""Path and string helpers used when reading plate configurations."""

from __future__ import annotations

import os

_WHITESPACE = " \t\n\v\f\r"
_DIGITS = frozenset("0123456789")


def _last_separator(filename: str) -> int:
    return max(filename.rfind("/"), filename.rfind("\\"))


def get_directory(filename: str) -> str:
    """Return the part of ``filename`` before its last path separator, or ''."""
    found = _last_separator(filename)
    return "" if found < 0 else filename[:found]


def get_basename(filename: str) -> str:
    """Return the part of ``filename`` after its last path separator."""
    return filename[_last_separator(filename) + 1:]


def chdir_file(filename: str) -> bool:
    """Change the working directory to the one holding ``filename``.

    Returns False if the directory could not be entered.
    """
    directory = get_directory(filename)
    if not directory:
        return True
    try:
        os.chdir(directory)
    except OSError:
        return False
    return True


def split(s: str, delim: str) -> list[str]:
    """Split ``s`` on ``delim``; a trailing empty field is dropped."""
    parts = s.split(delim)
    if parts[-1] == "":
        parts.pop()
    return parts


def split_with_escape(s: str, delim: str) -> list[str]:
    """Split ``s`` on ``delim``, joining fields whose delimiter was escaped by a backslash."""
    escaped: list[str] = []
    current = ""
    for elem in split(s, delim):
        current += elem
        if elem.endswith("\\"):
            current = current[:-1] + " "
        else:
            escaped.append(current)
            current = ""
    if current:
        escaped.append(current)
    return escaped


def is_numeric(text: str) -> bool:
    """Return True if every character of ``text`` is an ASCII digit."""
    return all(ch in _DIGITS for ch in text)


def ltrim(s: str) -> str:
    """Strip leading whitespace."""
    return s.lstrip(_WHITESPACE)


def rtrim(s: str) -> str:
    """Strip trailing whitespace."""
    return s.rstrip(_WHITESPACE)


def trim(s: str) -> str:
    """Strip whitespace on both ends."""
    return ltrim(rtrim(s))