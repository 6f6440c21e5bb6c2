"""Entry point: python -m claudewire "prompt" """

from __future__ import annotations

import argparse
import sys

from .client import Client
from .config import ClientConfig
from .errors import ClaudeWireError
from .logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Send one prompt to the Claude Messages API")
    parser.add_argument("prompt", help="User prompt text")
    parser.add_argument("--model", default=None, help="Model id (default: CLAUDEWIRE_DEFAULT_MODEL)")
    parser.add_argument("--max-tokens", type=int, default=None, help="Maximum output tokens")
    parser.add_argument("--system", default=None, help="System prompt")
    parser.add_argument("--no-stream", action="store_true", help="Wait for the complete response")
    parser.add_argument("--log-level", default=None, help="Log level (default: WARNING)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = ClientConfig()
    if args.log_level:
        config.log_level = args.log_level

    setup_logging(config.log_level, config.log_dir)

    with Client(config) as client:
        request = (
            client.messages()
            .model(args.model or config.default_model)
            .max_tokens(args.max_tokens or config.default_max_tokens)
            .messages([{"role": "user", "content": args.prompt}])
        )
        if args.system:
            request.system(args.system)

        try:
            if args.no_stream:
                print(request.create().text())
            else:
                with request.stream() as stream:
                    for text in stream.text_stream():
                        sys.stdout.write(text)
                        sys.stdout.flush()
                sys.stdout.write("\n")
        except ClaudeWireError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
