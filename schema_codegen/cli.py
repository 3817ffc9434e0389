"""Command line interface for JSON Schema to Python model generation.

Exit codes:
  0  the run completed, including runs where generation failed and the
     error was printed
  1  --input was missing, empty or pointed at a nonexistent file
  2  the command line could not be parsed

Generation failures deliberately keep exit code 0, matching the tool this
replaces. Callers that need to detect them must read the output.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .codegen import generate_source, output_path_for, write_source
from .loader import load_schema
from .options import GenerationOptions, OptionsError, parse_options
from .settings import build_settings


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one generation attempt: an output path or an error."""

    output_path: Path | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def check_input(input_path: str) -> str | None:
    """Return the pre-flight error message for input_path, if any."""
    if not input_path:
        return "Input is required."
    if not Path(input_path).is_file():
        return f"Input '{input_path}' does not exist."
    return None


def attempt_generation(options: GenerationOptions) -> GenerationResult:
    """Load, generate and write; any failure becomes the result's error."""
    try:
        schema = load_schema(options.input_path)
        settings = build_settings(options)
        output_path = output_path_for(options.input_path)
        source = generate_source(schema, settings, Path(options.input_path).name)
        write_source(output_path, source)
    except Exception as exc:  # reported, never raised
        return GenerationResult(error=exc)
    return GenerationResult(output_path=output_path)


def run(argv: Sequence[str]) -> int:
    """Run the generator for argv and return the process exit code."""
    try:
        options = parse_options(argv)
    except OptionsError as exc:
        sys.stderr.write(exc.usage)
        print(f"schema-codegen: error: {exc}", file=sys.stderr)
        return 2

    problem = check_input(options.input_path)
    if problem is not None:
        print(problem)
        return 1

    result = attempt_generation(options)
    if result.ok:
        print(f"Generated Python models for schema: {options.input_path}")
    else:
        print(f"Error processing schema file '{options.input_path}': {result.error}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Console script entry point."""
    return run(sys.argv[1:] if argv is None else argv)


if __name__ == "__main__":
    raise SystemExit(main())
