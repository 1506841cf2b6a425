"""
Command-line interface for the generation backend.

Architectural role:
- Terminal access to the same dispatcher used by the HTTP API.
- Drives the two-phase sermon workflow interactively on the client side.

Commands:
- `providers`: list providers with complete credentials.
- `generate`: one request; input from the positional argument or stdin.
- `sermon`: outline -> approval -> full sermon. The approved outline is sent as
  the input of the second call; nothing is kept between calls.

Exit codes:
- 0 on success, 1 on any failed generation or when no provider is configured.
"""

import argparse
import sys

from app.api.main import configure_logging
from app.core.contracts import GenerationRequest, ProviderId
from app.llm.service import GenerationDispatcher
from app.prompting.prompt_builder import FULL_MODE, OUTLINE_MODE, SERMON_CRAFTER


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pulpit-ai", description=__doc__.strip().splitlines()[0])
    parser.add_argument("--log-level", default=None)
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("providers", help="List configured providers")

    providers = [p.value for p in ProviderId]

    gen = sub.add_parser("generate", help="Run one generation request")
    gen.add_argument("--task", required=True)
    gen.add_argument("--mode", default="default")
    gen.add_argument("--provider", choices=providers, default=None)
    gen.add_argument("input", nargs="?", help="Input text (read from stdin when omitted)")

    sermon = sub.add_parser("sermon", help="Interactive outline -> full sermon workflow")
    sermon.add_argument("--provider", choices=providers, default=None)
    sermon.add_argument("input", nargs="?", help="Sermon topic or passage")

    return parser


def _read_input(value, prompt="Input: ", input_fn=input):
    """Return `value`, or read it: all of piped stdin, else one prompted line."""
    if value:
        return value
    if not sys.stdin.isatty():
        return sys.stdin.read().strip()
    return input_fn(prompt).strip()


def _emit(result) -> int:
    if result.ok:
        print(result.output)
        return 0
    print(f"Error ({result.error_kind}): {result.error}", file=sys.stderr)
    return 1


def cmd_providers(dispatcher) -> int:
    available = dispatcher.list_available_providers()
    if not available:
        print("No provider configured. Add keys to .env", file=sys.stderr)
        return 1
    for provider in available:
        print(provider.value)
    return 0


def cmd_generate(dispatcher, args, input_fn=input) -> int:
    try:
        user_input = _read_input(args.input, input_fn=input_fn)
    except (EOFError, KeyboardInterrupt):
        print("\nAborted.", file=sys.stderr)
        return 1

    request = GenerationRequest(
        task=args.task,
        input=user_input,
        mode=args.mode,
        provider=args.provider,
    )
    return _emit(dispatcher.generate(request))


def cmd_sermon(dispatcher, args, input_fn=input) -> int:
    """
    Run the two-phase sermon workflow.

    Phase 1 asks for an outline. The user approves (`y`), regenerates (`r`), or
    aborts (`n`). Phase 2 sends the approved outline back as input with the
    full-sermon mode.

    The topic and each answer are read one line at a time, so piped input
    (topic line, then answer lines) drives the whole workflow.
    """
    try:
        topic = args.input or input_fn("Sermon topic or passage: ").strip()
    except (EOFError, KeyboardInterrupt):
        print("\nAborted.", file=sys.stderr)
        return 1

    while True:
        outline = dispatcher.generate(GenerationRequest(
            task=SERMON_CRAFTER, input=topic, mode=OUTLINE_MODE, provider=args.provider,
        ))
        if not outline.ok:
            return _emit(outline)

        print("\nOutline:\n")
        print(outline.output)
        print("\n" + "-" * 60 + "\n")

        try:
            answer = input_fn("Approve outline? [y]es / [r]egenerate / [n]o: ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            print("\nAborted.", file=sys.stderr)
            return 1

        if answer in ("y", "yes"):
            break
        if answer in ("r", "regenerate"):
            continue
        print("Outline not approved.", file=sys.stderr)
        return 1

    print("\nSermon:\n")
    full = dispatcher.generate(GenerationRequest(
        task=SERMON_CRAFTER, input=outline.output, mode=FULL_MODE, provider=args.provider,
    ))
    return _emit(full)


def main(argv=None, dispatcher=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level or "WARNING")

    # Best-effort UTF-8 console output.
    if hasattr(sys.stdout, "reconfigure"):
        try:
            sys.stdout.reconfigure(encoding="utf-8", errors="replace")
        except (OSError, ValueError):
            pass

    dispatcher = dispatcher or GenerationDispatcher()

    if args.command == "providers":
        return cmd_providers(dispatcher)
    if args.command == "generate":
        return cmd_generate(dispatcher, args)
    return cmd_sermon(dispatcher, args)


if __name__ == "__main__":
    sys.exit(main())
