"""
wallet_core.multipart
---------------------
multipart/form-data encoding for POE file uploads.

Parts are written in call order into an in-memory body. The writer must be
closed before the body is used: close() appends the terminating boundary, and
getvalue() refuses to hand out an unterminated body.
"""

from __future__ import annotations
import io
import os
import shutil
import uuid
from typing import BinaryIO, Iterable, Optional, Tuple

from .errors import LocalFileError, LocalFileNotFoundError, PreconditionError
from .logger import get_logger

log = get_logger("Wallet.Multipart")

CRLF = b"\r\n"
COPY_CHUNK = 64 * 1024


def _escape_quotes(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


class MultipartWriter:
    def __init__(self, boundary: Optional[str] = None):
        self.boundary = boundary or uuid.uuid4().hex
        self._buf = io.BytesIO()
        self._parts = 0
        self._closed = False

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"

    def _begin_part(self, headers: Iterable[Tuple[str, str]]) -> None:
        if self._closed:
            raise PreconditionError("multipart writer is already closed")
        if self._parts:
            self._buf.write(CRLF)
        self._buf.write(f"--{self.boundary}".encode("utf-8") + CRLF)
        for name, value in headers:
            self._buf.write(f"{name}: {value}".encode("utf-8") + CRLF)
        self._buf.write(CRLF)
        self._parts += 1

    def write_field(self, name: str, value: str) -> None:
        self._begin_part([
            ("Content-Disposition", f'form-data; name="{_escape_quotes(name)}"'),
        ])
        self._buf.write(str(value).encode("utf-8"))

    def create_form_file(self, field: str, filename: str) -> BinaryIO:
        """Start a file part and return the stream its content must be written to."""
        self._begin_part([
            ("Content-Disposition",
             f'form-data; name="{_escape_quotes(field)}"; filename="{_escape_quotes(filename)}"'),
            ("Content-Type", "application/octet-stream"),
        ])
        return self._buf

    def copy_file(self, field: str, path: str) -> int:
        """
        Add the file at ``path`` as a file part. The file handle is closed on
        every exit path, including a failure part-way through the copy.
        """
        try:
            src = open(path, "rb")
        except FileNotFoundError as e:
            log.error(f"[MULTIPART] open {path} fail: {e}")
            raise LocalFileNotFoundError(f"file not found: {path}", path=path) from e
        except OSError as e:
            log.error(f"[MULTIPART] open {path} fail: {e}")
            raise LocalFileError(f"cannot open {path}: {e}", path=path) from e

        with src:
            log.debug(f"[MULTIPART] open {path} succ")
            part = self.create_form_file(field, os.path.basename(path))
            start = part.tell()
            try:
                shutil.copyfileobj(src, part, COPY_CHUNK)
            except OSError as e:
                log.error(f"[MULTIPART] copy {path} into form fail: {e}")
                raise LocalFileError(f"reading {path} failed: {e}", path=path) from e
            return part.tell() - start

    def close(self) -> None:
        if self._closed:
            return
        if self._parts:
            self._buf.write(CRLF)
        self._buf.write(f"--{self.boundary}--".encode("utf-8") + CRLF)
        self._closed = True

    def getvalue(self) -> bytes:
        if not self._closed:
            raise PreconditionError("multipart body is not finalized; close the writer first")
        return self._buf.getvalue()


def encode_file_upload(
    fields: Iterable[Tuple[str, str]],
    file_field: str,
    file_path: str,
    boundary: Optional[str] = None,
) -> Tuple[bytes, str]:
    """
    Build a multipart body with the given metadata fields followed by the
    file at ``file_path``. Returns ``(body, content_type)``.
    """
    writer = MultipartWriter(boundary)
    for name, value in fields:
        writer.write_field(name, value)
        log.debug(f"[MULTIPART] write {name} field succ")

    size = writer.copy_file(file_field, file_path)
    log.info(f"[MULTIPART] wrote {size} bytes of {os.path.basename(file_path)} to form")

    writer.close()
    return writer.getvalue(), writer.content_type
