"""Parser registry for acmesh."""

from __future__ import annotations

from .anchored import InstallCertParser, IssueParser, RemoveParser, RenewParser, RevokeParser
from .base import BaseParser, ParserError
from .keyvalue import KeyValueInfoParser
from .renew_all import RenewAllParser
from .tabular import TabularListParser

_PARSER_CLASSES: dict[str, type[BaseParser]] = {
    parser_cls.name: parser_cls
    for parser_cls in (
        TabularListParser,
        KeyValueInfoParser,
        IssueParser,
        RenewParser,
        RenewAllParser,
        InstallCertParser,
        RevokeParser,
        RemoveParser,
    )
}


def get_parser(operation: str) -> BaseParser:
    normalized = (operation or "").lower()
    if normalized not in _PARSER_CLASSES:
        raise ParserError(f"No parser registered for '{operation}'")
    parser_cls = _PARSER_CLASSES[normalized]
    return parser_cls()


__all__ = [
    "BaseParser",
    "ParserError",
    "get_parser",
]
