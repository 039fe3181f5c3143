"""Response formatter for displaying chat replies and errors."""

import logging
from typing import TextIO

logger = logging.getLogger(__name__)


class ResponseFormatter:
    """Writes one reply or error event to the output stream."""

    def __init__(self, output: TextIO, show_usage: bool = True):
        self.output = output
        self.show_usage = show_usage

    def handle_event(self, event: dict) -> None:
        event_type = event.get("type")

        if event_type == "reply":
            self._print(f"\nResponse:\n{event.get('response', '')}\n")
            usage = event.get("usage") or {}
            if self.show_usage and usage:
                self._print(
                    f"[tokens: {usage.get('input_tokens', '?')} in / "
                    f"{usage.get('output_tokens', '?')} out]\n"
                )

        elif event_type == "error":
            message = event.get("message", "Unknown error")
            details = event.get("details")
            suffix = f" ({details})" if details else ""
            self._print(f"\nError: {message}{suffix}\n")

        else:
            logger.debug("Unknown event type: %s, event: %s", event_type, event)

    def _print(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()
