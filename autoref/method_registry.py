# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Method table for receiver-based resolution.

This stores method implementations keyed on the exact type of their
receiver parameter. The table does not resolve anything; it answers exact
(method name, receiver level) lookups and the resolver applies the
autoderef/autoref rules to choose the winner.

The receiver pattern is the type `self` has inside the implementation:

  impl M for X     { fn m(self) }    pattern X,   BY_VALUE
  impl M for &X    { fn m(self) }    pattern &X,  BY_VALUE
  impl RefM for X  { fn refm(&self) } pattern &X, BY_REFERENCE

so a BY_REFERENCE implementation always has a pattern depth of at least 1.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Iterator, List, Optional, Tuple

from autoref.core.errors import (
	DuplicateReceiverPatternError,
	InvalidReceiverPatternError,
	RegistryFrozenError,
)
from autoref.core.types_core import ReferenceLevel, TypeId, TypeTable
from autoref.spelling import parse_receiver

logger = logging.getLogger(__name__)

ImplId = int


class BindingMode(Enum):
	BY_VALUE = auto()
	BY_REFERENCE = auto()


@dataclass(frozen=True)
class MethodImpl:
	"""Registry entry for one implementation of a method name."""

	impl_id: ImplId
	method_name: str
	receiver_pattern: ReferenceLevel
	binding_mode: BindingMode

	@property
	def consumes_receiver(self) -> bool:
		"""True when calling this implementation moves an owned value."""
		return self.binding_mode is BindingMode.BY_VALUE and self.receiver_pattern.depth == 0

	@property
	def self_type(self) -> ReferenceLevel:
		"""The type the method is implemented for (`Self`)."""
		if self.binding_mode is BindingMode.BY_REFERENCE:
			return self.receiver_pattern.derefed()
		return self.receiver_pattern


class MethodTable:
	"""
	Store method implementations and answer exact receiver-pattern lookups.

	Within one method name every receiver pattern is unique, so a lookup
	yields at most one implementation and resolution can never be
	ambiguous.
	"""

	def __init__(self) -> None:
		self._by_pattern: Dict[Tuple[str, ReferenceLevel], MethodImpl] = {}
		self._by_name: Dict[str, List[MethodImpl]] = {}
		self._by_id: Dict[ImplId, MethodImpl] = {}
		self._next_id: ImplId = 1
		self._frozen = False

	def register_method(
		self,
		method_name: str,
		receiver_type: TypeId,
		receiver_depth: int,
		binding_mode: BindingMode,
	) -> MethodImpl:
		if self._frozen:
			raise RegistryFrozenError("method table is frozen; register methods during setup only")
		if receiver_depth < 0:
			raise InvalidReceiverPatternError(f"method '{method_name}' has negative receiver depth {receiver_depth}")
		if binding_mode is BindingMode.BY_REFERENCE and receiver_depth == 0:
			raise InvalidReceiverPatternError(
				f"by-reference method '{method_name}' needs a receiver depth of at least 1",
				notes=["a method taking &self has a reference as its receiver pattern"],
			)
		pattern = ReferenceLevel(receiver_type, receiver_depth)
		key = (method_name, pattern)
		existing = self._by_pattern.get(key)
		if existing is not None:
			logger.debug("rejected duplicate pattern %s for '%s'", pattern, method_name)
			raise DuplicateReceiverPatternError(
				f"method '{method_name}' already has an implementation for receiver type #{receiver_type} at depth {receiver_depth}",
				notes=[f"first registered as impl #{existing.impl_id}"],
			)
		impl = MethodImpl(
			impl_id=self._next_id,
			method_name=method_name,
			receiver_pattern=pattern,
			binding_mode=binding_mode,
		)
		self._next_id += 1
		self._by_pattern[key] = impl
		self._by_name.setdefault(method_name, []).append(impl)
		self._by_id[impl.impl_id] = impl
		logger.debug("registered impl #%d %s for %s (%s)", impl.impl_id, method_name, pattern, binding_mode.name)
		return impl

	def register_spelled(
		self,
		types: TypeTable,
		method_name: str,
		spelling: str,
		binding_mode: BindingMode,
	) -> MethodImpl:
		"""
		Register from the spelling of the implementing type, as in
		`impl RefM for &X`. A by-reference method gets one more borrow on its
		receiver pattern than the type it is implemented for.
		"""
		self_type = parse_receiver(types, spelling)
		depth = self_type.depth + (1 if binding_mode is BindingMode.BY_REFERENCE else 0)
		return self.register_method(method_name, self_type.type_id, depth, binding_mode)

	def freeze(self) -> None:
		self._frozen = True

	@property
	def is_frozen(self) -> bool:
		return self._frozen

	def find_exact(self, method_name: str, level: ReferenceLevel) -> Optional[MethodImpl]:
		"""Return the implementation whose receiver pattern is exactly `level`."""
		return self._by_pattern.get((method_name, level))

	def get_candidates(self, method_name: str) -> List[MethodImpl]:
		return list(self._by_name.get(method_name, []))

	def has_method(self, method_name: str) -> bool:
		return method_name in self._by_name

	def get_by_id(self, impl_id: ImplId) -> MethodImpl:
		return self._by_id[impl_id]

	def __iter__(self) -> Iterator[MethodImpl]:
		return iter(self._by_id.values())

	def __len__(self) -> int:
		return len(self._by_id)


__all__ = ["MethodTable", "MethodImpl", "BindingMode", "ImplId"]
