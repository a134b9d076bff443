"""
Streaming multipart/form-data bodies

A MultipartStream is a readable, iterable body with a known length, so
requests sends it with a Content-Length header and reads it in blocks
instead of holding every uploaded file in memory.
"""

import io
import os
from collections.abc import Iterator
from typing import IO

from urllib3.fields import RequestField

CHUNK_SIZE = 64 * 1024


class MultipartStream:
    """
    Multipart body assembled lazily from encoded field headers and open files

    The stream owns the file handles it is given: they are closed when the
    body has been read to the end or when close() is called.
    """

    def __init__(self, boundary: str):
        self.boundary = boundary
        self.content_type = f"multipart/form-data; boundary={boundary}"
        self._segments: list[IO[bytes]] = []
        self._length = 0
        self._current = 0
        self._finished = False
        self.closed = False

    def add_field(self, name: str, value: str | bytes) -> "MultipartStream":
        """Add a plain form field"""
        request_field = RequestField(name=name, data=value)
        request_field.make_multipart()
        data = value.encode("utf-8") if isinstance(value, str) else value
        self._add_bytes(self._part_header(request_field) + data + b"\r\n")
        return self

    def add_file(
        self, name: str, handle: IO[bytes], filename: str, content_type: str
    ) -> "MultipartStream":
        """
        Add a file part read from an open binary handle

        The handle is read from its current position to the end.
        """
        request_field = RequestField(name=name, data=b"", filename=filename)
        request_field.make_multipart(content_type=content_type)
        self._add_bytes(self._part_header(request_field))

        self._segments.append(handle)
        self._length += os.fstat(handle.fileno()).st_size - handle.tell()

        self._add_bytes(b"\r\n")
        return self

    def finish(self) -> "MultipartStream":
        """Append the closing boundary; no parts can be added afterwards"""
        if not self._finished:
            self._add_bytes(f"--{self.boundary}--\r\n".encode("latin-1"))
            self._finished = True
        return self

    def __len__(self) -> int:
        return self._length

    def read(self, size: int = -1) -> bytes:
        """Read up to size bytes (everything that is left if size < 0)"""
        if self.closed and self._current < len(self._segments):
            raise ValueError("I/O operation on closed multipart stream")

        chunks = []
        while self._current < len(self._segments) and size != 0:
            chunk = self._segments[self._current].read(size)
            if not chunk:
                self._current += 1
                continue
            chunks.append(chunk)
            if size > 0:
                size -= len(chunk)

        if self._current >= len(self._segments):
            self.close()
        return b"".join(chunks)

    def __iter__(self) -> Iterator[bytes]:
        while True:
            chunk = self.read(CHUNK_SIZE)
            if not chunk:
                return
            yield chunk

    def close(self) -> None:
        """Release every file handle owned by the stream"""
        if self.closed:
            return
        self.closed = True
        for segment in self._segments:
            segment.close()

    def __enter__(self) -> "MultipartStream":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _add_bytes(self, data: bytes) -> None:
        self._segments.append(io.BytesIO(data))
        self._length += len(data)

    def _part_header(self, request_field: RequestField) -> bytes:
        return f"--{self.boundary}\r\n{request_field.render_headers()}".encode("utf-8")
