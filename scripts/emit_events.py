# scripts/emit_events.py
import sys
import json
import logging
import argparse
from sse_stream.config import settings
from sse_stream.sse_utils import write_message

logger = logging.getLogger(__name__)


def main():
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Set up argument parser
    parser = argparse.ArgumentParser(
        description="Write Server-Sent Events messages to standard output."
    )
    parser.add_argument("data", nargs="*", help="Data lines of each message")
    parser.add_argument("--event", help="Event type of each message")
    parser.add_argument("--id", help="Event ID of each message")
    parser.add_argument("--retry", type=int, help="Reconnection time in milliseconds")
    parser.add_argument(
        "--count", type=int, default=1, help="Number of messages to write"
    )
    args = parser.parse_args()

    data = "\n".join(args.data) if args.data else None
    logger.debug(f"Writing {args.count} message(s)")

    try:
        for _ in range(args.count):
            write_message(
                sys.stdout.buffer,
                data=data,
                event=args.event,
                id=args.id,
                retry=args.retry,
            )
    except OSError as e:
        print(
            json.dumps({"error": f"Error writing events: {str(e)}"}, indent=2),
            file=sys.stderr,
        )
        sys.exit(1)


if __name__ == "__main__":
    main()
