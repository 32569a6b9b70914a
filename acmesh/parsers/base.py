"""Parser interfaces for acme.sh output."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel


class ParserError(RuntimeError):
    """Raised when no parser is registered for a requested operation."""


class BaseParser:
    """Base interface for acme.sh output parsers.

    Parsers are pure: the same output always yields the same result, and
    nothing is raised for unrecognised lines.
    """

    name: str = "base"

    def parse(self, output: str, options: Any = None) -> BaseModel:
        raise NotImplementedError("Parsers must implement parse()")


def extract_after(prefix: str, output: str) -> str | None:
    """Return the rest of the first line containing ``prefix``, stripped."""

    match = re.search(re.escape(prefix) + r"[ \t]*(.+)", output)
    if not match:
        return None
    value = match.group(1).strip()
    return value or None
