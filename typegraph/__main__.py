"""Command-line entry point: ``python -m typegraph`` / ``typegraph-validate``."""

from __future__ import annotations

import logging
import sys
from typing import Sequence

from .card import to_markdown_card
from .errors import SchemaError
from .loader import load_repository
from .parser import build_arg_parser, load_json_input
from .validator import JsonValidator

log = logging.getLogger("typegraph")

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_USAGE = 2


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_arg_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        # --help / --version exit 0; bad usage exits 2
        return exc.code if isinstance(exc.code, int) else EXIT_USAGE

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        json_input = load_json_input(args.json)
        repository = load_repository(args.schema)
        root = repository.resolve_root_type(args.root_type)
    except (OSError, LookupError, SchemaError, ValueError) as exc:
        print("Failed to validate JSON:", file=sys.stderr)
        print(f"- {exc}", file=sys.stderr)
        return EXIT_USAGE

    log.debug("validating %s against %s (root %s)", args.json, args.schema, root)
    errors = JsonValidator().validate(json_input, repository, root)

    if not errors:
        print("JSON is valid.")
        return EXIT_VALID

    if args.format == "markdown":
        print(to_markdown_card(errors))
    else:
        print("Validation failed:", file=sys.stderr)
        for error in errors:
            print(f"- {error.path}: {error.message}", file=sys.stderr)
    return EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
