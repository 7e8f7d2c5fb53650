"""
Utilities for writing complete Server-Sent Events (SSE) messages.
"""

import json
import re
from typing import Any

from sse_stream.message_writer import MessageWriter
from sse_stream.sink_interface import SinkInterface, write_all

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def write_event(sink: SinkInterface, event: str, data: dict[str, Any]) -> None:
    """
    Write a Server-Sent Event with event type and JSON data.

    :param sink: The destination to write to
    :param event: The event type (e.g., 'metadata', 'context_chunk', 'error')
    :param data: The data to send, will be JSON-encoded on a single line
    :raises OSError: If the event name or data could not be written
    """
    with MessageWriter(sink) as message:
        with message.event() as field:
            field.write_text(event)
        with message.data() as field:
            field.write_text(json.dumps(data))


def write_message(
    sink: SinkInterface,
    *,
    data: str | bytes | None = None,
    event: str | None = None,
    id: str | None = None,
    retry: int | None = None,
) -> None:
    """
    Write one message with the given fields, skipping those left as None.

    Fields are written in the order event, data, id, retry. Text data spanning
    several lines becomes one data field per line, which the client joins
    back together with newlines.

    :param sink: The destination to write to
    :param data: The event payload
    :param event: The event type
    :param id: The event ID
    :param retry: The reconnection time in milliseconds
    :raises OSError: If a field could not be written
    """
    with MessageWriter(sink) as message:
        if event is not None:
            with message.event() as field:
                field.write_text(event)
        if isinstance(data, str):
            for line in _LINE_BREAK.split(data):
                with message.data() as field:
                    field.write_text(line)
        elif data is not None:
            with message.data() as field:
                write_all(field, data)
        if id is not None:
            with message.id() as field:
                field.write_text(id)
        if retry is not None:
            with message.retry() as field:
                field.write_text(str(retry))
