"""
File, path and directory helpers.

Paths may be given as `str` or `pathlib.Path`. Reads of a missing file
return an empty result, and operations on a missing file do nothing.
Text reads without an explicit encoding detect it with charset-normalizer.
"""

from __future__ import annotations

import hashlib
import logging
import os
import shutil
import stat
import sys
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Union

from charset_normalizer import from_bytes

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

# Windows naming rules, applied on every platform
INVALID_PATH_CHARS = frozenset('"<>|' + "".join(chr(code) for code in range(32)))
INVALID_FILE_NAME_CHARS = INVALID_PATH_CHARS | frozenset(':*?\\/')

FILE_ATTRIBUTE_HIDDEN = 0x2
INVALID_FILE_ATTRIBUTES = 0xFFFFFFFF

HASH_CHUNK_SIZE = 64 * 1024


# =============================================================================
# ENCODING
# =============================================================================

def detect_encoding(raw: bytes) -> str:
    """Best-guess text encoding of `raw`; utf-8 when nothing matches."""
    if raw.startswith(b"\xef\xbb\xbf"):
        return "utf-8-sig"
    if raw.startswith((b"\xff\xfe", b"\xfe\xff")):
        return "utf-16"
    try:
        raw.decode("utf-8")
        return "utf-8"
    except UnicodeDecodeError:
        pass
    match = from_bytes(raw).best()
    return match.encoding if match is not None else "utf-8"


def decode_text(raw: bytes, encoding: Optional[str] = None) -> str:
    """
    Decode bytes, detecting the encoding when none is given.

    Undecodable bytes are replaced rather than raising.
    """
    if not raw:
        return ""
    return raw.decode(encoding or detect_encoding(raw), errors="replace")


# =============================================================================
# FILES
# =============================================================================

def exists(file_path: Optional[PathLike]) -> bool:
    return file_path is not None and os.path.isfile(file_path)


def read_all_text(file_path: Optional[PathLike], encoding: Optional[str] = None) -> str:
    if not exists(file_path):
        return ""
    return decode_text(read_all_bytes(file_path), encoding)


def read_all_lines(file_path: Optional[PathLike], encoding: Optional[str] = None) -> list[str]:
    text = read_all_text(file_path, encoding)
    return text.splitlines() if text else []


def read_all_bytes(file_path: Optional[PathLike]) -> bytes:
    if not exists(file_path):
        return b""
    try:
        return Path(file_path).read_bytes()
    except OSError as e:
        logger.debug(f"Could not read {file_path}: {e}")
        return b""


def write_all_text(file_path: PathLike, content: Optional[str], encoding: str = "utf-8") -> None:
    with open(file_path, "w", encoding=encoding, newline="") as f:
        f.write(content or "")


def write_all_lines(file_path: PathLike, lines: Optional[Iterable[str]], encoding: str = "utf-8") -> None:
    with open(file_path, "w", encoding=encoding, newline="") as f:
        for line in lines or ():
            f.write(line + os.linesep)


def write_all_bytes(file_path: PathLike, data: Optional[bytes]) -> None:
    Path(file_path).write_bytes(data or b"")


def append_text(file_path: PathLike, content: Optional[str], encoding: str = "utf-8") -> None:
    with open(file_path, "a", encoding=encoding, newline="") as f:
        f.write(content or "")


def append_lines(file_path: PathLike, lines: Optional[Iterable[str]], encoding: str = "utf-8") -> None:
    with open(file_path, "a", encoding=encoding, newline="") as f:
        for line in lines or ():
            f.write(line + os.linesep)


def delete_file(file_path: Optional[PathLike]) -> None:
    if exists(file_path):
        os.remove(file_path)


def copy_to(file_path: Optional[PathLike], dest_path: PathLike, overwrite: bool = True) -> None:
    """
    Copy a file; nothing happens when the source is missing.

    Raises:
        FileExistsError: If `dest_path` exists and `overwrite` is False.
    """
    if not exists(file_path):
        return
    if not overwrite and os.path.exists(dest_path):
        raise FileExistsError(f"File already exists: {dest_path}")
    shutil.copy2(file_path, dest_path)


def move_to(file_path: Optional[PathLike], dest_path: PathLike, overwrite: bool = True) -> None:
    """
    Move a file; nothing happens when the source is missing.

    Raises:
        FileExistsError: If `dest_path` exists and `overwrite` is False.
    """
    if not exists(file_path):
        return
    if os.path.exists(dest_path):
        if not overwrite:
            raise FileExistsError(f"File already exists: {dest_path}")
        os.remove(dest_path)
    shutil.move(os.fspath(file_path), os.fspath(dest_path))


def get_file_size(file_path: Optional[PathLike]) -> int:
    return os.path.getsize(file_path) if exists(file_path) else 0


def _timestamp(path: Optional[PathLike], attribute: str) -> datetime:
    if path is None or not os.path.exists(path):
        return datetime.min
    result = os.stat(path)
    value = getattr(result, attribute, None)
    if value is None:
        value = result.st_ctime
    return datetime.fromtimestamp(value)


def get_creation_time(path: Optional[PathLike]) -> datetime:
    """Creation time (local), `datetime.min` when the path is missing."""
    # st_birthtime exists on macOS/BSD and on Windows from 3.12
    return _timestamp(path, "st_birthtime")


def get_last_write_time(path: Optional[PathLike]) -> datetime:
    return _timestamp(path, "st_mtime")


def get_last_access_time(path: Optional[PathLike]) -> datetime:
    return _timestamp(path, "st_atime")


def is_read_only(file_path: Optional[PathLike]) -> bool:
    return exists(file_path) and not os.stat(file_path).st_mode & stat.S_IWRITE


def set_read_only(file_path: Optional[PathLike]) -> None:
    if exists(file_path):
        mode = os.stat(file_path).st_mode
        os.chmod(file_path, mode & ~(stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH))


def unset_read_only(file_path: Optional[PathLike]) -> None:
    if exists(file_path):
        os.chmod(file_path, os.stat(file_path).st_mode | stat.S_IWUSR)


def _file_digest(file_path: Optional[PathLike], algorithm: str) -> str:
    if not exists(file_path):
        return ""
    digest = hashlib.new(algorithm)
    with open(file_path, "rb") as f:
        for block in iter(lambda: f.read(HASH_CHUNK_SIZE), b""):
            digest.update(block)
    return digest.hexdigest()


def get_file_md5(file_path: Optional[PathLike]) -> str:
    """Lower-case hex MD5 of the file contents, "" when missing."""
    return _file_digest(file_path, "md5")


def get_file_sha256(file_path: Optional[PathLike]) -> str:
    return _file_digest(file_path, "sha256")


# =============================================================================
# HIDDEN ATTRIBUTE
# =============================================================================
#
# Windows uses the FILE_ATTRIBUTE_HIDDEN flag. Elsewhere a path is hidden
# when its name starts with a dot, and the flag cannot be toggled.

def _windows_attributes(path: PathLike) -> int:
    import ctypes

    return ctypes.windll.kernel32.GetFileAttributesW(os.fspath(path))


def _set_windows_attributes(path: PathLike, attributes: int) -> None:
    import ctypes

    if not ctypes.windll.kernel32.SetFileAttributesW(os.fspath(path), attributes):
        raise ctypes.WinError()


def is_hidden(path: Optional[PathLike]) -> bool:
    if path is None or not os.path.exists(path):
        return False
    if sys.platform == "win32":
        attributes = _windows_attributes(path)
        return attributes != INVALID_FILE_ATTRIBUTES and bool(attributes & FILE_ATTRIBUTE_HIDDEN)
    return Path(path).name.startswith(".")


def set_hidden(path: Optional[PathLike]) -> None:
    if path is None or not os.path.exists(path):
        return
    if sys.platform == "win32":
        _set_windows_attributes(path, _windows_attributes(path) | FILE_ATTRIBUTE_HIDDEN)
    else:
        logger.debug(f"Hidden attribute is not supported on {sys.platform}: {path}")


def unset_hidden(path: Optional[PathLike]) -> None:
    if path is None or not os.path.exists(path):
        return
    if sys.platform == "win32":
        _set_windows_attributes(path, _windows_attributes(path) & ~FILE_ATTRIBUTE_HIDDEN)
    else:
        logger.debug(f"Hidden attribute is not supported on {sys.platform}: {path}")


# =============================================================================
# PATHS
# =============================================================================

def is_absolute(path: Optional[PathLike]) -> bool:
    return bool(path) and os.path.isabs(path)


def is_relative(path: Optional[PathLike]) -> bool:
    return bool(path) and not os.path.isabs(path)


def get_extension(path: Optional[PathLike]) -> str:
    """Extension including the dot, e.g. ".txt"."""
    return os.path.splitext(path)[1] if path else ""


def get_file_name(path: Optional[PathLike]) -> str:
    return os.path.basename(path) if path else ""


def get_file_name_without_extension(path: Optional[PathLike]) -> str:
    return os.path.splitext(os.path.basename(path))[0] if path else ""


def get_directory_name(path: Optional[PathLike]) -> str:
    return os.path.dirname(path) if path else ""


def combine_paths(*paths: PathLike) -> str:
    if not paths:
        return ""
    return os.path.join(*paths)


def get_path_root(path: Optional[PathLike]) -> str:
    """Drive and leading separator, "" for relative paths."""
    if not path:
        return ""
    drive, rest = os.path.splitdrive(os.fspath(path))
    separators = (os.sep, os.altsep) if os.altsep else (os.sep,)
    return drive + (os.sep if rest.startswith(separators) else "")


def get_full_path(path: Optional[PathLike]) -> str:
    return os.path.abspath(path) if path else ""


def get_temp_file_path() -> str:
    """Create an empty temporary file and return its path."""
    fd, path = tempfile.mkstemp()
    os.close(fd)
    return path


def get_temp_directory() -> str:
    return tempfile.gettempdir()


def change_extension(path: Optional[PathLike], extension: Optional[str]) -> str:
    """Replace the extension; None or "" removes it."""
    if not path:
        return ""
    root = os.path.splitext(os.fspath(path))[0]
    if not extension:
        return root
    return root + (extension if extension.startswith(".") else "." + extension)


def has_invalid_chars(path: Optional[str]) -> bool:
    return bool(path) and any(char in INVALID_PATH_CHARS for char in path)


def file_name_has_invalid_chars(file_name: Optional[str]) -> bool:
    return bool(file_name) and any(char in INVALID_FILE_NAME_CHARS for char in file_name)


def get_directory_separator() -> str:
    return os.sep


def get_alt_directory_separator() -> str:
    return os.altsep or "/"


def get_directory_separator_string() -> str:
    return os.sep


def get_volume_separator() -> str:
    return ":" if sys.platform == "win32" else "/"


def is_unc_path(path: Optional[str]) -> bool:
    return bool(path) and path.startswith("\\\\")


def split_directories(path: Optional[str]) -> list[str]:
    """Path components, without empty entries."""
    if not path:
        return []
    return [part for part in path.replace("\\", "/").split("/") if part]


def get_parent_directory(path: Optional[PathLike]) -> str:
    return os.path.dirname(path) if path else ""


def is_root_directory(path: Optional[PathLike]) -> bool:
    if not path:
        return False
    root = get_path_root(path)
    return bool(root) and os.fspath(path).rstrip("\\/").lower() == root.rstrip("\\/").lower()


def normalize_path(path: Optional[PathLike]) -> str:
    """Absolute, normalized path without a trailing separator."""
    if not path:
        return ""
    full = os.path.normpath(os.path.abspath(path))
    return full if is_root_directory(full) else full.rstrip("\\/")


def get_relative_path(path: Optional[PathLike], base_path: Optional[PathLike]) -> Optional[PathLike]:
    if not path or not base_path:
        return path
    return os.path.relpath(path, base_path)


def is_file(path: Optional[PathLike]) -> bool:
    return bool(path) and os.path.isfile(path)


def is_directory(path: Optional[PathLike]) -> bool:
    return bool(path) and os.path.isdir(path)


def exists_path(path: Optional[PathLike]) -> bool:
    return bool(path) and os.path.exists(path)


# =============================================================================
# DIRECTORIES
# =============================================================================

def _glob(directory: Optional[PathLike], pattern: str, recursive: bool) -> list[Path]:
    if not is_directory(directory):
        return []
    root = Path(directory)
    return sorted(root.rglob(pattern) if recursive else root.glob(pattern))


def get_files_safe(directory: Optional[PathLike], pattern: str = "*",
                   recursive: bool = False) -> list[Path]:
    return [path for path in _glob(directory, pattern, recursive) if path.is_file()]


def get_directories_safe(directory: Optional[PathLike], pattern: str = "*",
                         recursive: bool = False) -> list[Path]:
    return [path for path in _glob(directory, pattern, recursive) if path.is_dir()]


def get_file_paths(directory: Optional[PathLike], pattern: str = "*",
                   recursive: bool = False) -> list[str]:
    """Absolute paths of the matching files."""
    return [str(path.resolve()) for path in get_files_safe(directory, pattern, recursive)]


def get_directory_paths(directory: Optional[PathLike], pattern: str = "*",
                        recursive: bool = False) -> list[str]:
    return [str(path.resolve()) for path in get_directories_safe(directory, pattern, recursive)]


def create_safe(directory: Optional[PathLike]) -> None:
    if directory is not None:
        os.makedirs(directory, exist_ok=True)


def delete_safe(directory: Optional[PathLike], recursive: bool = False) -> None:
    """
    Remove a directory.

    Raises:
        OSError: If the directory is not empty and `recursive` is False.
    """
    if not is_directory(directory):
        return
    if recursive:
        shutil.rmtree(directory)
    else:
        os.rmdir(directory)


def move_directory(directory: Optional[PathLike], dest_path: PathLike) -> None:
    if is_directory(directory):
        shutil.move(os.fspath(directory), os.fspath(dest_path))


def get_name(directory: Optional[PathLike]) -> str:
    """Last component of a directory path."""
    if not directory:
        return ""
    return Path(os.fspath(directory).rstrip("\\/")).name
