# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Type registry shared by the method table, deref-chain builder and resolver.

TypeIds are opaque ints indexing into a TypeTable. A TypeDef carries the
type's name, its optional view-as (deref) target and whether owned values
of the type may be implicitly copied. References are not separate types:
a ReferenceLevel wraps a TypeId with a borrow depth.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from autoref.core.errors import (
	CyclicViewChainError,
	DuplicateTypeError,
	DuplicateViewAsError,
	RegistryFrozenError,
	UnknownTypeError,
)

logger = logging.getLogger(__name__)

TypeId = int  # opaque handle into the TypeTable


@dataclass(frozen=True)
class TypeDef:
	"""Definition of a type stored in the TypeTable."""

	type_id: TypeId
	name: str
	is_copy: bool = False
	view_as: Optional[TypeId] = None  # deref target, at most one


@dataclass(frozen=True, order=True)
class ReferenceLevel:
	"""A type wrapped in `depth` shared borrows (0 = owned value)."""

	type_id: TypeId
	depth: int = 0

	def __post_init__(self) -> None:
		if self.depth < 0:
			raise ValueError(f"negative borrow depth {self.depth}")

	@property
	def base_type(self) -> TypeId:
		return self.type_id

	@property
	def is_reference(self) -> bool:
		return self.depth > 0

	def borrowed(self) -> "ReferenceLevel":
		return ReferenceLevel(self.type_id, self.depth + 1)

	def derefed(self) -> "ReferenceLevel":
		if self.depth == 0:
			raise ValueError("cannot peel a borrow off an owned value")
		return ReferenceLevel(self.type_id, self.depth - 1)


class TypeTable:
	"""
	Catalog of concrete receiver types and their view-as edges.

	Populated once during setup; `freeze()` seals it so that resolution can
	treat it as read-only. Cycles in the view-as relation are rejected when
	the closing edge is registered.
	"""

	def __init__(self) -> None:
		self._defs: Dict[TypeId, TypeDef] = {}
		self._by_name: Dict[str, TypeId] = {}
		self._next_id: TypeId = 1  # reserve 0 for "invalid"
		self._frozen = False

	def register_type(self, name: str, *, is_copy: bool = False) -> TypeId:
		"""Register a named type and return its TypeId."""
		self._check_mutable()
		if name in self._by_name:
			raise DuplicateTypeError(f"type '{name}' is already registered")
		ty_id = self._next_id
		self._next_id += 1
		self._defs[ty_id] = TypeDef(type_id=ty_id, name=name, is_copy=is_copy)
		self._by_name[name] = ty_id
		logger.debug("registered type %s as #%d (copy=%s)", name, ty_id, is_copy)
		return ty_id

	def ensure_type(self, name: str, *, is_copy: bool = False) -> TypeId:
		"""Return the TypeId for `name`, registering it on first use."""
		existing = self._by_name.get(name)
		if existing is not None:
			return existing
		return self.register_type(name, is_copy=is_copy)

	def register_view_as(self, from_type: TypeId, to_type: TypeId) -> None:
		"""Declare that `from_type` derefs to `to_type`."""
		self._check_mutable()
		src = self.get(from_type)
		self.get(to_type)
		if src.view_as is not None:
			raise DuplicateViewAsError(
				f"type '{src.name}' already views as '{self.name_of(src.view_as)}'",
				notes=[f"rejected second target '{self.name_of(to_type)}'"],
			)
		# Each type has at most one outgoing edge, so walking from the new
		# target is enough to find a cycle through `from_type`.
		path: List[TypeId] = [from_type]
		cur: Optional[TypeId] = to_type
		while cur is not None:
			path.append(cur)
			if cur == from_type:
				names = [self.name_of(t) for t in path]
				logger.debug("rejected view-as %s -> %s: cycle %s", src.name, self.name_of(to_type), names)
				raise CyclicViewChainError(
					f"view-as edge '{src.name}' -> '{self.name_of(to_type)}' closes a cycle",
					cycle=names,
					notes=[" -> ".join(names)],
				)
			cur = self._defs[cur].view_as
		self._defs[from_type] = TypeDef(type_id=src.type_id, name=src.name, is_copy=src.is_copy, view_as=to_type)
		logger.debug("registered view-as %s -> %s", src.name, self.name_of(to_type))

	def freeze(self) -> None:
		self._frozen = True

	@property
	def is_frozen(self) -> bool:
		return self._frozen

	def get(self, ty: TypeId) -> TypeDef:
		"""Fetch the TypeDef for a given TypeId."""
		try:
			return self._defs[ty]
		except KeyError:
			raise UnknownTypeError(f"unknown type id {ty}") from None

	def lookup(self, name: str) -> TypeId:
		"""Fetch the TypeId registered under `name`."""
		try:
			return self._by_name[name]
		except KeyError:
			raise UnknownTypeError(f"unknown type '{name}'") from None

	def view_as(self, ty: TypeId) -> Optional[TypeId]:
		return self.get(ty).view_as

	def is_copy(self, ty: TypeId) -> bool:
		return self.get(ty).is_copy

	def name_of(self, ty: TypeId) -> str:
		return self.get(ty).name

	def __contains__(self, ty: object) -> bool:
		return ty in self._defs

	def __iter__(self) -> Iterator[TypeDef]:
		return iter(self._defs.values())

	def __len__(self) -> int:
		return len(self._defs)

	def _check_mutable(self) -> None:
		if self._frozen:
			raise RegistryFrozenError("type table is frozen; register types during setup only")


__all__ = ["TypeId", "TypeDef", "TypeTable", "ReferenceLevel"]
