"""Entry point: python -m schema_codegen --input path/to/schema.json

Generates path/to/schema.py next to the input schema.
"""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
