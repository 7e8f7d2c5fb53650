import errno
from typing import Protocol


class SinkInterface(Protocol):
    """Byte destination written by the SSE writers.

    Any binary file-like object qualifies: io.BytesIO, a buffered file,
    socket.makefile("wb"), a response body stream.
    """

    def write(self, data: bytes, /) -> int | None:
        """
        Write bytes to the destination.

        Returns:
            The number of bytes accepted, or None when a non-blocking sink
            would block and accepted nothing (as io.RawIOBase.write does).

        Raises:
            OSError: If the underlying resource fails.
        """
        ...

    def flush(self) -> None:
        """
        Push any bytes buffered by the sink itself to their destination.

        Raises:
            OSError: If the underlying resource fails.
        """
        ...


def write_all(sink: SinkInterface, data: bytes) -> None:
    """
    Write every byte of data, retrying on partial writes.

    :param sink: The destination to write to.
    :param data: The bytes to write.
    :raises BlockingIOError: If a non-blocking sink would block. Its
        characters_written holds the number of bytes accepted before that.
    :raises OSError: If the sink fails, or accepts zero bytes of a non-empty buffer.
    """
    view = memoryview(data)
    total = 0
    while view:
        written = sink.write(view)
        if written is None:
            raise BlockingIOError(errno.EAGAIN, "sink would block", total)
        if written == 0:
            raise OSError("failed to write whole buffer")
        total += written
        view = view[written:]
