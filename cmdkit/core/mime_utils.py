"""
MIME utilities - Content-type sniffing for archive files
Magic bytes first, file extension as fallback.
"""

from pathlib import Path
from typing import Optional, Union

from .logging_utils import log


HEADER_SIZE = 512

# Signatures: (offset, bytes, mime)
SIGNATURES = [
    (0, b'\x1F\x8B', 'application/x-gzip'),
    (0, b'BZh', 'application/x-bzip2'),
    (0, b'PK\x03\x04', 'application/zip'),
    (0, b'PK\x05\x06', 'application/zip'),
    (0, b'PK\x07\x08', 'application/zip'),
    (0, b'\xFD7zXZ\x00', 'application/x-xz'),
    (0, b'7z\xBC\xAF\x27\x1C', 'application/x-7z-compressed'),
    (0, b'Rar!\x1A\x07', 'application/x-rar'),
    (0, b'\x1F\x9D', 'application/x-compress'),
    (257, b'ustar', 'application/x-tar'),
]

# Checked in order, so compound extensions come before their suffixes
EXTENSION_TYPES = [
    ('.tar.gz', 'application/x-gzip'),
    ('.tgz', 'application/x-gzip'),
    ('.tar.bz2', 'application/x-bzip2'),
    ('.tbz2', 'application/x-bzip2'),
    ('.tar.xz', 'application/x-xz'),
    ('.tar', 'application/x-tar'),
    ('.zip', 'application/zip'),
    ('.gz', 'application/x-gzip'),
    ('.bz2', 'application/x-bzip2'),
    ('.xz', 'application/x-xz'),
    ('.7z', 'application/x-7z-compressed'),
    ('.rar', 'application/x-rar'),
]

TARBALL_TYPES = {
    'application/x-bzip2',
    'application/x-gzip',
    'application/x-tar',
    'application/x-zip',
    'application/zip',
}

_PREFERRED_EXTENSIONS = {
    'application/x-gzip': '.tar.gz',
    'application/x-bzip2': '.tar.bz2',
    'application/x-tar': '.tar',
    'application/zip': '.zip',
    'application/x-zip': '.zip',
    'application/x-xz': '.tar.xz',
    'application/x-7z-compressed': '.7z',
    'application/x-rar': '.rar',
    'application/x-compress': '.Z',
}


def sniff_content_type(data: Union[bytes, bytearray, memoryview]) -> Optional[str]:
    """
    Detect an archive MIME type from header bytes.

    Args:
        data: Leading bytes of the file (at least 262 for tar detection)

    Returns:
        MIME type or None when no signature matches
    """
    if not data:
        return None
    if isinstance(data, (bytearray, memoryview)):
        data = bytes(data)

    for offset, sig, mime in SIGNATURES:
        if data[offset:offset + len(sig)] == sig:
            return mime
    return None


def content_type_from_extension(filename: Union[str, Path]) -> Optional[str]:
    # Download URLs may carry a query string after the file name
    name = str(filename).split('?', 1)[0].lower()
    for extension, mime in EXTENSION_TYPES:
        if name.endswith(extension):
            return mime
    return None


def mime_content_type(path: Union[str, Path]) -> Optional[str]:
    """
    Determine the content type of a file.

    Args:
        path: File to inspect

    Returns:
        MIME type, or None when neither the header nor the extension is recognised
    """
    path = Path(path)
    content_type = None

    try:
        with open(path, 'rb') as f:
            content_type = sniff_content_type(f.read(HEADER_SIZE))
    except OSError as e:
        log(f"Could not read {path}: {e}", 'warning')

    if content_type is None:
        content_type = content_type_from_extension(path.name)

    if content_type:
        log(f"Mime type for {path} is {content_type}", 'notice')
    return content_type


def file_is_tarball(path: Union[str, Path]) -> Optional[str]:
    """Content type of a file when it is an archive type that can be unpacked, else None."""
    content_type = mime_content_type(path)
    return content_type if content_type in TARBALL_TYPES else None


def archive_extension(content_type: Optional[str]) -> Optional[str]:
    """Preferred file extension for an archive content type."""
    if not content_type:
        return None
    return _PREFERRED_EXTENSIONS.get(content_type)
