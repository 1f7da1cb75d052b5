# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Dereference chains for method receivers.

`build_chain` follows view-as edges from a type until none remains.
`autoderef_steps` expands a receiver level into every place the resolver
probes, in order: first the receiver's own borrows are peeled one at a
time, then the view-as chain of its base type is followed.

  &&X   (X views as Int)  ->  &&X, &X, X, Int

Both are generators so the resolver only forces the prefix it needs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Set

from autoref.core.errors import CyclicViewChainError
from autoref.core.types_core import ReferenceLevel, TypeId, TypeTable


@dataclass(frozen=True)
class DerefStep:
	"""One candidate receiver place in autoderef order."""

	level: ReferenceLevel
	deref_count: int
	# True once at least one dereference was applied: the place is then only
	# reachable through a borrow and cannot be moved out of.
	borrowed: bool


def build_chain(table: TypeTable, start: TypeId) -> Iterator[TypeId]:
	"""Yield `start` and every type reachable from it through view-as edges."""
	seen: Set[TypeId] = set()
	order: List[TypeId] = []
	cur = start
	while True:
		if cur in seen:
			names = [table.name_of(t) for t in order] + [table.name_of(cur)]
			raise CyclicViewChainError(
				f"view-as chain from '{table.name_of(start)}' revisits '{table.name_of(cur)}'",
				cycle=names,
				notes=[" -> ".join(names)],
			)
		seen.add(cur)
		order.append(cur)
		yield cur
		nxt = table.view_as(cur)
		if nxt is None:
			return
		cur = nxt


def autoderef_steps(table: TypeTable, start: ReferenceLevel) -> Iterator[DerefStep]:
	count = 0
	level = start
	while level.depth > 0:
		yield DerefStep(level=level, deref_count=count, borrowed=count > 0)
		level = level.derefed()
		count += 1
	chain = build_chain(table, start.type_id)
	for ty in chain:
		yield DerefStep(level=ReferenceLevel(ty, 0), deref_count=count, borrowed=count > 0)
		count += 1


def chain_names(table: TypeTable, start: TypeId) -> List[str]:
	"""Names along the view-as chain, mostly for diagnostics."""
	return [table.name_of(t) for t in build_chain(table, start)]


__all__ = ["DerefStep", "build_chain", "autoderef_steps", "chain_names"]
