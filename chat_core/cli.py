"""Interactive terminal chat.

Usage:
    chat-core                      # or: python -m chat_core
    LOG_LEVEL=INFO chat-core       # log full API requests and responses

The whole chat history is sent with every request so the model can answer
within the context of the conversation. Enter `c` to clear the history and
`q` to exit.
"""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Optional, Sequence

from chat_core.agents.chat_bot import ChatBot
from chat_core.config.credentials import load_api_key
from chat_core.config.settings import settings
from chat_core.domain.exceptions import BusinessError, CredentialError
from chat_core.infrastructure.logging.logger import setup_logger


PROMPT_HELP = "Enter text. Enter `c` to clear the chat history and `q` to exit."
QUIT_COMMAND = "q"
CLEAR_COMMAND = "c"


def format_reply(text: str, tokens: int) -> str:
    return f"GPT [{tokens:,} tokens used for this context and prompt]: {text}"


def run_repl(
    bot: ChatBot,
    model: str,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """Read lines until `q` or EOF, submitting everything that isn't a command."""

    write(f"> {PROMPT_HELP}")
    while True:
        try:
            line = read("> ").strip()
        except (EOFError, KeyboardInterrupt):
            write("  [Exiting]")
            return

        if line == QUIT_COMMAND:
            write("  [Exiting]")
            return
        if line == CLEAR_COMMAND:
            write("  [Clearing chat history]")
            bot.reset()
            continue
        if not line:
            write(f"> {PROMPT_HELP}")
            continue

        write(f"  [Sending chat to {model}...]")
        try:
            text, tokens = bot.submit(line)
        except BusinessError as exc:
            write(f"  [Error] {exc.message}")
            continue
        write(format_reply(text, tokens))


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Chat with an OpenAI model from the terminal.")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL (e.g. INFO to log API traffic)")
    parser.add_argument("--model", default=None, help="Override the chat model ID")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logger(level=args.log_level)

    cfg = settings
    if args.model:
        cfg = settings.model_copy(update={"chat_model": args.model})

    try:
        api_key = load_api_key(cfg)
    except CredentialError as exc:
        sys.stderr.write(f"{exc.message}\n")
        return 1

    bot = ChatBot.from_api_key(api_key, cfg)
    try:
        run_repl(bot, cfg.chat_model)
    finally:
        bot.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
