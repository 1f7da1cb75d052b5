# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Receiver spellings.

Receiver levels are written the way they appear in method-call examples:
`&&X` is two shared borrows of `X`. Implementations are named after the
type they are implemented for, so `refm(&self)` implemented for `X` is
`X::refm` even though its receiver pattern is `&X`. Parsing goes through a
small lark grammar (`spelling.lark`); names are resolved against a
TypeTable.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from lark import Lark, Token, Tree, UnexpectedInput

from autoref.core.errors import AutorefError
from autoref.core.types_core import ReferenceLevel, TypeTable

if TYPE_CHECKING:
	from autoref.method_registry import MethodImpl

_GRAMMAR_PATH = Path(__file__).with_name("spelling.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="receiver",
	maybe_placeholders=False,
)


class SpellingError(AutorefError):
	"""Malformed receiver spelling."""

	reason_code = "InvalidSpelling"


def _parse(text: str) -> Tree:
	try:
		return _PARSER.parse(text)
	except UnexpectedInput as exc:
		raise SpellingError(f"invalid spelling {text!r}", notes=(str(exc).strip().splitlines() or ["parse error"])[:1]) from exc


def _build_receiver(table: TypeTable, tree: Tree) -> ReferenceLevel:
	depth = 0
	name = ""
	for child in tree.children:
		assert isinstance(child, Token)
		if child.type == "AMP":
			depth += 1
		else:
			name = str(child)
	return ReferenceLevel(table.lookup(name), depth)


def parse_receiver(table: TypeTable, text: str) -> ReferenceLevel:
	"""Parse `&&X` into the ReferenceLevel (X, 2)."""
	return _build_receiver(table, _parse(text))


def spell_level(table: TypeTable, level: ReferenceLevel) -> str:
	return "&" * level.depth + table.name_of(level.type_id)


def spell_impl(table: TypeTable, impl: "MethodImpl") -> str:
	return f"{spell_level(table, impl.self_type)}::{impl.method_name}"


__all__ = ["SpellingError", "parse_receiver", "spell_level", "spell_impl"]
