"""
Command-line entry point.

    henshin family.forms.yaml -o family.out.yaml
    henshin family.forms.json --input-format json --format source

Reads a serialized form list (as produced by an external parser), runs
the transform, writes the result and prints every error marker as a
diagnostic on stderr.

Exit status: 0 clean, 1 error markers present, 2 unusable input.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import yaml

from henshin.backends.source_printer import generate_source
from henshin.config import DEFAULT_OPTIONS, load_options
from henshin.errors import HenshinError, format_diagnostic
from henshin.model import FormKind
from henshin.serialization import (
    forms_from_json,
    forms_from_yaml,
    forms_to_json,
    forms_to_yaml,
)
from henshin.transform import parse_transform

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="henshin",
        description="Rewrite rule declarations in a serialized form list into functions",
    )
    parser.add_argument("input", help="Serialized forms (YAML or JSON), '-' for stdin")
    parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    parser.add_argument("--input-format", choices=["yaml", "json"], default="yaml")
    parser.add_argument("--format", choices=["yaml", "json", "source"], default="yaml")
    parser.add_argument("--config", help="YAML file with transform options")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        options = load_options(args.config) if args.config else DEFAULT_OPTIONS
        if args.input == "-":
            text = sys.stdin.read()
        else:
            with open(args.input) as f:
                text = f.read()
        if args.input_format == "json":
            forms = forms_from_json(text, options.origin)
        else:
            forms = forms_from_yaml(text, options.origin)
        result = parse_transform(forms, options)
    except (HenshinError, OSError, ValueError, TypeError, KeyError, yaml.YAMLError) as e:
        # json.JSONDecodeError is a ValueError
        logger.debug("transform failed", exc_info=True)
        print(f"henshin: {e}", file=sys.stderr)
        return 2

    if args.format == "json":
        output = forms_to_json(result)
    elif args.format == "source":
        output = generate_source(result)
    else:
        output = forms_to_yaml(result)

    if args.output:
        with open(args.output, "w") as f:
            f.write(output)
    else:
        sys.stdout.write(output)

    # Diagnostics refer to the last -file marker preceding each error
    current_file = "nofile"
    errors = 0
    for form in result:
        if form.kind is FormKind.ATTRIBUTE and form.name == "file":
            current_file = form.file
        elif form.kind is FormKind.ERROR_MARKER:
            errors += 1
            print(format_diagnostic(form, current_file), file=sys.stderr)

    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
