"""
Send a single message from the terminal.

    chatrelay "Describe this" --system "Be concise" --image https://example.com/cat.jpg
"""
import argparse
import asyncio
import os
import sys
from typing import List, Optional

from .client import ChatRelay
from .config import configure_logging
from .rich_llm_printer import RichPrinter
from .schemas import ChatRequest, ChatResult


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chatrelay", description="Send one chat message to an LLM provider.")
    parser.add_argument("message", help="Text of the message")
    parser.add_argument("--system", default="", help="System prompt")
    parser.add_argument("--provider", default="openai")
    parser.add_argument("--model", default="gpt-4o")
    parser.add_argument(
        "--image", dest="images", action="append", default=[], metavar="URL",
        help="Image URL or data URI to attach (repeatable)",
    )
    parser.add_argument("--log-level", default=None)
    return parser


def request_from_args(args: argparse.Namespace, api_key: str) -> ChatRequest:
    images = [
        {"id": str(i), "name": url.rsplit("/", 1)[-1], "size": 0, "url": url}
        for i, url in enumerate(args.images)
    ]
    return ChatRequest(
        provider=args.provider,
        model=args.model,
        api_key=api_key,
        system_prompt=args.system,
        message=args.message,
        attachments={"images": images},
    )


async def run(args: argparse.Namespace, relay: Optional[ChatRelay] = None) -> ChatResult:
    relay = relay or ChatRelay()
    request = request_from_args(args, os.getenv("OPENAI_API_KEY", ""))
    return await relay.chat_completion(request)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    result = asyncio.run(run(args))
    RichPrinter().print_chat(result)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
