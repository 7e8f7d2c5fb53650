"""
Incremental writer for a single Server-Sent Events message.

Example:

    with MessageWriter(sink) as message:
        with message.event() as field:
            field.write(b"ping")
        with message.data() as field:
            field.write(b"abc")
            field.write(b"1337")

writes b"event:ping\\ndata:abc1337\\n\\n" to the sink, byte by byte as it is
produced. Nothing is buffered between the caller and the sink.
"""

import logging
from types import TracebackType

from sse_stream.field_writer import (
    FINALIZE_ERRORS,
    FieldName,
    FieldWriter,
    SSEWriterError,
    handle_finalize_error,
    resolve_strict_close,
)
from sse_stream.sink_interface import SinkInterface, write_all

logger = logging.getLogger(__name__)

MESSAGE_TERMINATOR = b"\n"


class FieldAlreadyOpenError(SSEWriterError):
    """Raised when a field is opened while another field of the message is still open"""

    pass


class MessageClosedError(SSEWriterError):
    """Raised when a closed message is used"""

    pass


class MessageWriter:
    """
    An SSE message made of any number of fields followed by a blank line.

    Each field method writes the field name to the sink immediately and
    returns a FieldWriter that has exclusive use of the sink until it is
    closed. Closing the message writes the terminating blank line and flushes
    the sink. The sink itself is never closed.
    """

    def __init__(self, sink: SinkInterface, *, strict_close: bool | None = None):
        self._sink = sink
        self._strict_close = resolve_strict_close(strict_close)
        self._field: FieldWriter | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def data(self) -> FieldWriter:
        """
        Append a data field.

        This is the payload handed to the client's event listener. When a
        message carries several data fields the client joins their values
        with newlines. A message without data does not dispatch an event.
        """
        return self.field(FieldName.DATA)

    def event(self) -> FieldWriter:
        """
        Append an event name field.

        Tags the message with an event name so the client dispatches it to
        the listener registered for that name instead of "message".
        """
        return self.field(FieldName.EVENT)

    def id(self) -> FieldWriter:
        """Append an event ID field, setting the stream's last event ID."""
        return self.field(FieldName.ID)

    def retry(self) -> FieldWriter:
        """
        Append a retry field.

        The value must be an integer: the reconnection time, in milliseconds,
        the client waits before reestablishing a dropped stream.
        """
        return self.field(FieldName.RETRY)

    def field(self, name: FieldName | str) -> FieldWriter:
        """
        Append a field with the given name.

        :param name: One of the SSE field names.
        :return: A writer for the field value, open until closed by the caller.
        :raises ValueError: If name is not an SSE field name.
        :raises MessageClosedError: If the message has been closed.
        :raises FieldAlreadyOpenError: If a field returned earlier is still open.
        :raises OSError: If the field name could not be written. No field is
            opened and the call may be retried.
        """
        field_name = FieldName(name)
        if self._closed:
            logger.error(f"Attempted to open {field_name.value} field on closed message")
            raise MessageClosedError(
                f"Cannot open {field_name.value} field: message is closed"
            )
        if self._field is not None and not self._field.closed:
            logger.error(
                f"Attempted to open {field_name.value} field while "
                f"{self._field.name.value} field is open"
            )
            raise FieldAlreadyOpenError(
                f"Cannot open {field_name.value} field: "
                f"{self._field.name.value} field is still open"
            )
        self._field = FieldWriter(
            self._sink, field_name, strict_close=self._strict_close
        )
        return self._field

    def close(self) -> None:
        """
        Terminate the message and flush the sink.

        A field left open is terminated first. Calling close() again has no
        effect.
        """
        self._finalize(self._strict_close)

    def __enter__(self) -> "MessageWriter":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self._finalize(self._strict_close and exc_type is None)

    def _finalize(self, strict: bool) -> None:
        if self._closed:
            return
        self._closed = True

        error: OSError | ValueError | None = None
        if self._field is not None and not self._field.closed:
            logger.debug(f"Terminating {self._field.name.value} field left open")
            try:
                self._field.close()
            except FINALIZE_ERRORS as e:
                error = e
                if not strict:
                    handle_finalize_error(e, "terminating open field", strict)
        self._field = None

        # The terminator and the flush are attempted independently.
        try:
            write_all(self._sink, MESSAGE_TERMINATOR)
        except FINALIZE_ERRORS as e:
            error = error or e
            if not strict:
                handle_finalize_error(e, "terminating message", strict)
        try:
            self._sink.flush()
        except FINALIZE_ERRORS as e:
            error = error or e
            if not strict:
                handle_finalize_error(e, "flushing message", strict)

        if strict and error is not None:
            raise error
