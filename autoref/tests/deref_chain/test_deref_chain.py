# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import itertools

import pytest

from autoref.core.errors import CyclicViewChainError
from autoref.core.types_core import ReferenceLevel, TypeDef, TypeTable
from autoref.deref_chain import DerefStep, autoderef_steps, build_chain, chain_names


def _zyi(types: TypeTable):
	i32 = types.register_type("i32")
	y = types.register_type("Y")
	z = types.register_type("Z")
	types.register_view_as(y, i32)
	types.register_view_as(z, y)
	return z, y, i32


def test_chain_without_view_as_is_just_the_start(types: TypeTable) -> None:
	x = types.register_type("X")
	assert list(build_chain(types, x)) == [x]


def test_chain_follows_view_as_edges(types: TypeTable) -> None:
	z, y, i32 = _zyi(types)
	assert list(build_chain(types, z)) == [z, y, i32]
	assert chain_names(types, y) == ["Y", "i32"]


def test_chain_is_lazy(types: TypeTable) -> None:
	z, y, _ = _zyi(types)
	assert list(itertools.islice(build_chain(types, z), 2)) == [z, y]


def test_chain_detects_cycle_that_slipped_past_registration(types: TypeTable) -> None:
	p = types.register_type("P")
	q = types.register_type("Q")
	types.register_view_as(p, q)
	# Simulate a corrupted table; registration itself refuses the cycle.
	types._defs[q] = TypeDef(type_id=q, name="Q", view_as=p)
	chain = build_chain(types, p)
	assert next(chain) == p
	assert next(chain) == q
	with pytest.raises(CyclicViewChainError) as excinfo:
		next(chain)
	assert excinfo.value.cycle == ("P", "Q", "P")


def test_autoderef_steps_peel_borrows_then_follow_chain(types: TypeTable) -> None:
	z, y, i32 = _zyi(types)
	steps = list(autoderef_steps(types, ReferenceLevel(z, 2)))
	assert steps == [
		DerefStep(level=ReferenceLevel(z, 2), deref_count=0, borrowed=False),
		DerefStep(level=ReferenceLevel(z, 1), deref_count=1, borrowed=True),
		DerefStep(level=ReferenceLevel(z, 0), deref_count=2, borrowed=True),
		DerefStep(level=ReferenceLevel(y, 0), deref_count=3, borrowed=True),
		DerefStep(level=ReferenceLevel(i32, 0), deref_count=4, borrowed=True),
	]


def test_autoderef_steps_owned_start_is_not_borrowed(types: TypeTable) -> None:
	z, y, _ = _zyi(types)
	first, second = itertools.islice(autoderef_steps(types, ReferenceLevel(z)), 2)
	assert first == DerefStep(level=ReferenceLevel(z), deref_count=0, borrowed=False)
	assert second.level == ReferenceLevel(y) and second.borrowed
