# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass

import pytest

from autoref.core.types_core import TypeTable
from autoref.method_registry import BindingMode, MethodTable
from autoref.method_resolver import MethodResolver


@dataclass
class World:
	types: TypeTable
	methods: MethodTable
	resolver: MethodResolver


@pytest.fixture
def types() -> TypeTable:
	return TypeTable()


@pytest.fixture
def methods() -> MethodTable:
	return MethodTable()


@pytest.fixture
def auto_ref_world() -> World:
	"""
	The classic autoderef/autoref table:

	  X -> i32, Y -> i32, Z -> Y (view-as edges), A is Copy.
	  m(self)     for i32, X, &X, &&X, &&&X, A, &&&A
	  refm(&self) for i32, X, &X, &&X, &&&X, A, &&&A
	"""
	types = TypeTable()
	i32 = types.register_type("i32", is_copy=True)
	x = types.register_type("X")
	y = types.register_type("Y")
	z = types.register_type("Z")
	types.register_type("A", is_copy=True)
	types.register_view_as(x, i32)
	types.register_view_as(y, i32)
	types.register_view_as(z, y)

	methods = MethodTable()
	for spelled in ("i32", "X", "&X", "&&X", "&&&X", "A", "&&&A"):
		methods.register_spelled(types, "m", spelled, BindingMode.BY_VALUE)
		methods.register_spelled(types, "refm", spelled, BindingMode.BY_REFERENCE)
	types.freeze()
	methods.freeze()
	return World(types=types, methods=methods, resolver=MethodResolver(types, methods))
