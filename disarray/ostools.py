"""File, directory and text helpers."""

from __future__ import annotations

import os
from typing import Mapping

_LITHUANIAN_CODES = {
    "Ą": 161, "ą": 177, "Č": 200, "č": 232, "Ę": 202, "ę": 234,
    "Ė": 204, "ė": 236, "Į": 199, "į": 231, "Š": 169, "š": 185,
    "Ų": 217, "ų": 249, "Ū": 222, "ū": 254, "Ž": 174, "ž": 190,
}


def encode_lithuanian(text: str, max_length: int) -> bytes:
    """Encode text to single bytes, mapping Lithuanian letters to their codes.

    Other characters keep the low byte of their code point; the result stops
    at the first zero byte and is cut to ``max_length`` bytes.
    """
    encoded = bytes(_LITHUANIAN_CODES.get(ch, ord(ch) & 0xFF) for ch in text)
    encoded = encoded.split(b"\0", 1)[0]
    return encoded[:max(max_length, 0)]


def read_file_data(path: str | os.PathLike) -> bytes:
    """Read a whole file; an empty file is an error."""
    with open(path, "rb") as stream:
        data = stream.read()
    if not data:
        raise ValueError(f"file is empty: {os.fspath(path)}")
    return data


def home_path(environ: Mapping[str, str] | None = None) -> str:
    """The user's home directory with a trailing slash, or ``./``."""
    env = os.environ if environ is None else environ
    home = env.get("HOME")
    if home is not None:
        return f"{home}/"
    drive = env.get("HOMESHARE")
    if drive is None:
        drive = env.get("HOMEDRIVE")
    path = env.get("HOMEPATH")
    if drive is not None and path is not None:
        return f"{drive}{path}/"
    return "./"


def list_files(path: str | os.PathLike) -> list[str]:
    """All entries of a directory, including ``.`` and ``..``, sorted."""
    with os.scandir(path) as entries:
        names = [entry.name for entry in entries]
    return sorted([".", "..", *names])


def list_directories(path: str | os.PathLike) -> list[str]:
    """Subdirectory names, including ``.`` and ``..``, sorted."""
    with os.scandir(path) as entries:
        names = [entry.name for entry in entries if entry.is_dir(follow_symlinks=False)]
    return sorted([".", "..", *names])


def make_dir(path: str | os.PathLike) -> None:
    """Create a private directory; an existing one is left alone."""
    try:
        os.mkdir(path, 0o700)
    except FileExistsError:
        pass