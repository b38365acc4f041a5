"""Command-line entrypoint: pick a backend, send the prompt, print the series."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from .config import load_credentials, load_settings
from .llm.providers.base import Invoker
from .llm.router import BACKEND_NAMES, DEFAULT_BACKEND, BackendRouter
from .llm.transport import build_invoker
from .llm.types import AdapterError, ConfigurationError
from .prompts import build_series_prompt

EXIT_ADAPTER_ERROR = 1
EXIT_CONFIG_ERROR = 2

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract a TV series name with an Amazon Bedrock model"
    )
    # Unknown names are rejected by the router so they surface as UnknownBackend.
    parser.add_argument(
        "--model",
        default=DEFAULT_BACKEND,
        help=f"Backend to call: {', '.join(BACKEND_NAMES)} (default: {DEFAULT_BACKEND})",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--prompt", help="Prompt text sent to the model as-is")
    source.add_argument("--input", help="Text filled into the series-extraction prompt")
    parser.add_argument("--settings", default="config/settings.yaml", help="Path to settings.yaml")
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "INFO"),
        help="Diagnostics level on stderr (default: INFO, which includes token usage)",
    )
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )


def run(argv: Optional[Sequence[str]] = None, invoker: Optional[Invoker] = None) -> int:
    """Runs one invocation and returns the process exit code."""
    args = _build_parser().parse_args(argv)
    _configure_logging(args.log_level)

    try:
        settings = load_settings(args.settings)
        if args.prompt is not None:
            prompt_text = args.prompt
        else:
            prompt_text = build_series_prompt(args.input, settings.get("prompt_template"))

        if args.model not in BACKEND_NAMES:
            raise ConfigurationError(
                f"UnknownBackend: '{args.model}' (expected one of {', '.join(BACKEND_NAMES)})"
            )
        if invoker is None:
            invoker = build_invoker(settings, load_credentials(settings))
        outcome = BackendRouter(settings, invoker=invoker).run(args.model, prompt_text)
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except AdapterError as exc:
        logger.debug("Adapter failure", exc_info=exc)
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ADAPTER_ERROR
    return outcome.exit_code


def main() -> None:
    load_dotenv()
    sys.exit(run())


if __name__ == "__main__":
    main()
