import logging
from enum import Enum
from types import TracebackType

from sse_stream.config import settings
from sse_stream.sink_interface import SinkInterface, write_all

logger = logging.getLogger(__name__)

FIELD_TERMINATOR = b"\n"

# Closed io objects raise ValueError instead of OSError.
FINALIZE_ERRORS = (OSError, ValueError)


class FieldName(str, Enum):
    """The field names an SSE message can carry."""

    DATA = "data"
    EVENT = "event"
    ID = "id"
    RETRY = "retry"

    @property
    def prefix(self) -> bytes:
        return f"{self.value}:".encode("ascii")


class SSEWriterError(Exception):
    """Base exception class for misuse of the SSE writers"""

    pass


def resolve_strict_close(strict_close: bool | None) -> bool:
    return settings.strict_close if strict_close is None else strict_close


def handle_finalize_error(
    error: OSError | ValueError, what: str, strict: bool
) -> None:
    """
    Apply the finalize-time error policy.

    Terminators are written on a best-effort basis: unless strict, the error
    is logged and discarded, so the caller cannot tell that the terminator
    never reached the sink.

    :param error: The error raised by the sink while finalizing.
    :param what: Short description of the failed step, used in the log line.
    :param strict: Re-raise the error instead of discarding it.
    :raises OSError: If strict is set and the sink failed.
    :raises ValueError: If strict is set and the sink was already closed.
    """
    if strict:
        raise error
    logger.warning(f"Discarding I/O error while {what}: {error}")


class FieldWriter:
    """
    A single field of an SSE message.

    The "<name>:" prefix is written on construction, the value is appended by
    writing into the field any number of times, and close() terminates the
    field with a newline. Written values must not contain newline bytes.

    Use as a context manager so the terminator is written on every exit path:

        with FieldWriter(sink, FieldName.DATA) as field:
            field.write(b"abc")
    """

    def __init__(
        self,
        sink: SinkInterface,
        name: FieldName | str,
        *,
        strict_close: bool | None = None,
    ):
        """
        Write the field-name prefix and open the field.

        :param sink: The destination to write to.
        :param name: One of the SSE field names.
        :param strict_close: Raise terminator write errors from close(). Defaults
            to the strict_close setting.
        :raises ValueError: If name is not an SSE field name.
        :raises OSError: If the prefix could not be written.
        """
        self._name = FieldName(name)
        self._strict_close = resolve_strict_close(strict_close)
        write_all(sink, self._name.prefix)
        self._sink = sink
        self._closed = False

    @property
    def name(self) -> FieldName:
        return self._name

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, data: bytes) -> int | None:
        """
        Append bytes to the field value, passing them straight to the sink.

        :param data: Raw value bytes, without newlines.
        :return: The number of bytes the sink accepted, or None if a
            non-blocking sink would block and accepted nothing.
        :raises OSError: If the sink fails.
        """
        self._check_open()
        return self._sink.write(data)

    def write_text(self, text: str, encoding: str = "utf-8") -> None:
        """Encode text and append all of it to the field value."""
        self._check_open()
        write_all(self._sink, text.encode(encoding))

    def flush(self) -> None:
        self._check_open()
        self._sink.flush()

    def close(self) -> None:
        """Terminate the field. Calling close() again has no effect."""
        self._finalize(self._strict_close)

    def __enter__(self) -> "FieldWriter":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        # Never replace an exception that is already propagating.
        self._finalize(self._strict_close and exc_type is None)

    def _finalize(self, strict: bool) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            write_all(self._sink, FIELD_TERMINATOR)
        except FINALIZE_ERRORS as e:
            handle_finalize_error(e, f"terminating {self._name.value} field", strict)

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError(f"I/O operation on closed {self._name.value} field")

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<FieldWriter name={self._name.value!r} {state}>"
