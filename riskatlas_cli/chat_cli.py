"""Main CLI loop for interactive chat."""

import logging
import sys
from typing import TextIO

from .client import EVENT_REPLY, ChatAPIClient
from .config import CLIConfig
from .formatter import ResponseFormatter

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("exit", "quit", "q")


class RiskAtlasCLI:
    """Interactive CLI for the RiskAtlas chat API.

    Conversation history lives here, not on the server: each successful
    exchange appends the user turn and the assistant reply.
    """

    def __init__(
        self,
        config: CLIConfig,
        input_stream: TextIO = sys.stdin,
        output_stream: TextIO = sys.stdout,
        client: ChatAPIClient | None = None,
    ):
        self.config = config
        self.input_stream = input_stream
        self.output_stream = output_stream
        self.client = client or ChatAPIClient(config)
        self.history: list[dict[str, str]] = []

    async def run(self) -> None:
        """Run the interactive CLI loop."""
        try:
            self._print_welcome()
            while True:
                try:
                    message = self._get_user_input()
                    if not message.strip():
                        continue

                    if message.strip().lower() in EXIT_COMMANDS:
                        self._print("Goodbye!\n")
                        break

                    await self._process_message(message)

                except KeyboardInterrupt:
                    self._print("\n\nInterrupted. Use 'exit' or 'quit' to exit.\n")
                except EOFError:
                    self._print("\nGoodbye!\n")
                    break
        finally:
            await self.client.close()

    async def _process_message(self, message: str) -> None:
        formatter = ResponseFormatter(self.output_stream)
        event = await self.client.chat(message, list(self.history))
        formatter.handle_event(event)
        self._print("\n")

        if event.get("type") == EVENT_REPLY:
            self.history.append({"role": "user", "content": message})
            self.history.append(
                {"role": "assistant", "content": event.get("response", "")}
            )

    def _get_user_input(self) -> str:
        self._print("> ")
        line = self.input_stream.readline()
        if not line:
            raise EOFError
        return line.rstrip("\n\r")

    def _print_welcome(self) -> None:
        self._print("RiskAtlas CLI - ask about the RiskAtlas platform\n")
        self._print(f"Connected to: {self.config.chat_url}\n")
        self._print(
            "Type your message and press Enter. Type 'exit' or 'quit' to exit.\n\n"
        )

    def _print(self, text: str) -> None:
        self.output_stream.write(text)
        self.output_stream.flush()


async def main(
    host: str = "localhost",
    port: int = 8000,
    api_path: str = "/api/chat",
    debug: bool = False,
) -> None:
    """Main entry point for the CLI.

    Parameters
    ----------
    host
        Server host.
    port
        Server port.
    api_path
        API path.
    debug
        Enable debug logging.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    config = CLIConfig(host=host, port=port, api_path=api_path)
    cli = RiskAtlasCLI(config)
    await cli.run()
