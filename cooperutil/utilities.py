"""Helper functions: encodings, paths, host-name matching, content types."""

from __future__ import annotations

import os
import re
import secrets
from collections.abc import Iterator

_EXTENSION_RE = re.compile(r"\.([a-zA-Z0-9]+)\Z")

_CONTENT_TYPES = {
    "css": "text/css",
    "csv": "text/csv",
    "htm": "text/html",
    "html": "text/html",
    "js": "text/javascript",
    "mjs": "text/javascript",
    "txt": "text/plain",
    "vtt": "text/vtt",
    "apng": "image/apng",
    "avif": "image/avif",
    "bmp": "image/bmp",
    "gif": "image/gif",
    "png": "image/png",
    "svg": "image/svg+xml",
    "webp": "image/webp",
    "ico": "image/x-icon",
    "tif": "image/tiff",
    "tiff": "image/tiff",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "mp4": "video/mp4",
    "mpeg": "video/mpeg",
    "webm": "video/webm",
    "mp3": "audio/mp3",
    "mpga": "audio/mpeg",
    "weba": "audio/webm",
    "wav": "audio/wave",
    "otf": "font/otf",
    "ttf": "font/ttf",
    "woff": "font/woff",
    "woff2": "font/woff2",
    "7z": "application/x-7z-compressed",
    "atom": "application/atom+xml",
    "pdf": "application/pdf",
    "json": "application/json",
    "rss": "application/rss+xml",
    "tar": "application/x-tar",
    "xht": "application/xhtml+xml",
    "xhtml": "application/xhtml+xml",
    "xslt": "application/xslt+xml",
    "xml": "application/xml",
    "gz": "application/gzip",
    "zip": "application/zip",
    "wasm": "application/wasm",
}
_DEFAULT_CONTENT_TYPE = "application/octet-stream"


def to_utf8(text: str) -> bytes:
    """Encode a text string as UTF-8 bytes."""
    return text.encode("utf-8")


def from_utf8(data: bytes) -> str:
    """Decode UTF-8 bytes; invalid input yields an empty string."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return ""


def to_wide_path(path: bytes | str) -> str:
    """Turn a UTF-8 encoded path into a text path."""
    if isinstance(path, str):
        return path
    return from_utf8(path)


def from_wide_path(path: str) -> bytes:
    """Turn a text path into a UTF-8 encoded path."""
    return to_utf8(path)


def to_native_path(path: bytes | str) -> bytes:
    """Return the native (UTF-8 encoded) form of a path."""
    if isinstance(path, bytes):
        return path
    return from_wide_path(path)


def from_native_path(path: bytes | str) -> bytes:
    """Return the portable UTF-8 form of a native path."""
    if isinstance(path, bytes):
        return path
    return from_wide_path(path)


def _labels_split(name: str) -> tuple[int, str]:
    """Return the index of the first dot (or length) and the part after it."""
    dot = name.find(".")
    if dot == -1:
        return len(name), ""
    return dot, name[dot + 1:]


def _prefix_matches(cert_label: str, host_label: str) -> bool:
    for cert_char, host_char in zip(cert_label, host_label):
        if cert_char == "*":
            break
        if cert_char != host_char:
            return False
    return True


def verify_ssl_name(cert_name: str, hostname: str) -> bool:
    """Check whether a certificate name, possibly with a wildcard, matches a host."""
    if "*" not in cert_name:
        return cert_name == hostname

    first_dot, cert_rest = _labels_split(cert_name)
    host_first_dot, host_rest = _labels_split(hostname)
    cert_label = cert_name[:first_dot]
    host_label = hostname[:host_first_dot]

    if cert_label == "*":
        return cert_rest == host_rest
    if cert_name[0] == "*":
        return hostname.endswith(cert_name[1:])
    if cert_rest != host_rest:
        return False
    if not _prefix_matches(cert_label, host_label):
        return False
    if first_dot != 0 and cert_name[first_dot - 1] == "*":
        return True
    for cert_char, host_char in zip(reversed(cert_label), reversed(host_label)):
        if cert_char == "*":
            break
        if cert_char != host_char:
            return False
    return True


def tls_backend() -> str:
    """Name the TLS backend in use."""
    return "openssl"


def to_hex_string(data: bytes) -> str:
    """Render bytes as upper-case hexadecimal."""
    return bytes(data).hex().upper()


def secure_random_bytes(size: int) -> bytes:
    """Return ``size`` cryptographically secure random bytes."""
    if size < 0:
        raise ValueError("size must not be negative")
    return secrets.token_bytes(size)


def is_space_or_tab(c: str) -> bool:
    """Return True for a space or a tab character."""
    return c in (" ", "\t")


def trim(text: str, left: int = 0, right: int | None = None) -> tuple[int, int]:
    """Move ``left`` and ``right`` inward past spaces and tabs.

    ``left`` never moves past the end of ``text``; ``right`` never below zero.
    """
    if right is None:
        right = len(text)
    while left < len(text) and is_space_or_tab(text[left]):
        left += 1
    while right > 0 and is_space_or_tab(text[right - 1]):
        right -= 1
    return left, right


def split(text: str, delimiter: str) -> Iterator[str]:
    """Yield the non-empty, trimmed pieces of ``text`` between delimiters."""
    begin = 0
    for index, char in enumerate(text):
        if char == delimiter:
            first, second = trim(text, begin, index)
            if first < second:
                yield text[first:second]
            begin = index + 1
    if text:
        first, second = trim(text, begin, len(text))
        if first < second:
            yield text[first:second]


def is_valid_path(path: str) -> bool:
    """Return False if the path climbs above its root with '..'."""
    level = 0
    for component in filter(None, path.split("/")):
        if component == ".":
            continue
        if component == "..":
            if level == 0:
                return False
            level -= 1
        else:
            level += 1
    return True


def is_dir(path: str) -> bool:
    """Return True if ``path`` names a directory."""
    return os.path.isdir(path)


def is_file(path: str) -> bool:
    """Return True if ``path`` names a regular file."""
    return os.path.isfile(path)


def file_extension(path: str) -> str:
    """Return the alphanumeric extension of ``path`` without the dot, or ''."""
    match = _EXTENSION_RE.search(path)
    return match.group(1) if match else ""


def find_content_type(path: str) -> str:
    """Guess a MIME type from the file extension."""
    return _CONTENT_TYPES.get(file_extension(path), _DEFAULT_CONTENT_TYPE)


def get_file_size(path: str) -> int:
    """Return the size of the file in bytes, or 0 if it cannot be read."""
    try:
        return os.stat(path).st_size
    except OSError:
        return 0


def trim_double_quotes_copy(s: str) -> str:
    """Strip one pair of surrounding double quotes, if present."""
    if len(s) >= 2 and s[0] == '"' and s[-1] == '"':
        return s[1:-1]
    return s


def trim_copy(s: str) -> str:
    """Strip leading and trailing spaces and tabs."""
    first, second = trim(s)
    return s[first:second]


def parse_disposition_params(s: str) -> list[tuple[str, str]]:
    """Parse ``key=value`` parameters separated by ';'.

    Returns (key, value) pairs ordered by key, keeping the input order among
    equal keys. Repeated identical parameters appear once.
    """
    seen: set[str] = set()
    params: list[tuple[str, str]] = []
    for item in split(s, ";"):
        if item in seen:
            continue
        seen.add(item)
        key = ""
        value = ""
        for piece in split(item, "="):
            if not key:
                key = piece
            else:
                value = piece
        if key:
            params.append((trim_double_quotes_copy(key), trim_double_quotes_copy(value)))
    params.sort(key=lambda pair: pair[0])
    return params