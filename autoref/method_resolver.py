# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Method resolution atop MethodTable and TypeTable.

This module applies the receiver rules:
- Walk the autoderef steps of the receiver (own borrows first, then the
  view-as chain of the base type), strictly left to right.
- At each step, first look for an implementation whose receiver pattern is
  the step's type exactly (by-value probe), then for one whose pattern is
  a reference to it (autoref probe). First hit wins.
- A by-value hit that would move a non-copyable value out of a borrow is a
  hard error; the scan does not continue past it.

It returns the chosen MethodImpl plus the receiver Adjustment (deref count
and whether one reference is then taken).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from autoref.core.diagnostics import Diagnostic
from autoref.core.errors import (
	IllegalMoveOfBorrowedReceiverError,
	NoMatchingMethodError,
	ResolutionError,
)
from autoref.core.types_core import ReferenceLevel, TypeId, TypeTable
from autoref.deref_chain import DerefStep, autoderef_steps
from autoref.method_registry import MethodImpl, MethodTable
from autoref.spelling import spell_impl, spell_level

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReceiverDescriptor:
	"""Static receiver of a method call: `depth` borrows of `type_id`."""

	type_id: TypeId
	reference_depth: int = 0
	# None defers to the base type's registered copy flag.
	is_copyable: Optional[bool] = None

	def __post_init__(self) -> None:
		if self.reference_depth < 0:
			raise ValueError(f"negative reference depth {self.reference_depth}")

	@property
	def level(self) -> ReferenceLevel:
		return ReferenceLevel(self.type_id, self.reference_depth)


@dataclass(frozen=True)
class Adjustment:
	"""Apply `dereference_count` derefs, then borrow once if `then_borrow`."""

	dereference_count: int = 0
	then_borrow: bool = False
	# The by-value call duplicates a copyable value found behind a borrow.
	implicit_copy: bool = False

	@property
	def is_identity(self) -> bool:
		return self.dereference_count == 0 and not self.then_borrow and not self.implicit_copy


@dataclass(frozen=True)
class ResolutionResult:
	"""Resolved method with the receiver adjustment that reaches it."""

	implementation: MethodImpl
	adjustment: Adjustment
	step_index: int
	matched_level: ReferenceLevel  # the probed place, before any autoref


@dataclass(frozen=True)
class ResolutionOutcome:
	result: Optional[ResolutionResult] = None
	diagnostic: Optional[Diagnostic] = None

	@property
	def ok(self) -> bool:
		return self.result is not None


@dataclass(frozen=True)
class ResolverOptions:
	enable_auto_deref: bool = True
	enable_auto_borrow: bool = True


class MethodResolver:
	"""
	Resolve method calls against read-only registries.

	The resolver keeps no state between calls; one instance can serve any
	number of callers.
	"""

	def __init__(self, types: TypeTable, methods: MethodTable, options: Optional[ResolverOptions] = None) -> None:
		self.types = types
		self.methods = methods
		self.options = options or ResolverOptions()

	def resolve(self, receiver: ReceiverDescriptor, method_name: str) -> ResolutionResult:
		recv_spelled = spell_level(self.types, receiver.level)
		probed: List[str] = []
		for step in autoderef_steps(self.types, receiver.level):
			if step.deref_count > 0 and not self.options.enable_auto_deref:
				break
			# By-value probe: receiver pattern is exactly this place's type.
			impl = self.methods.find_exact(method_name, step.level)
			if impl is not None:
				adjustment = self._by_value_adjustment(receiver, step, impl, method_name, recv_spelled)
				return self._matched(receiver, method_name, impl, adjustment, step)
			probed.append(spell_level(self.types, step.level))
			if not self.options.enable_auto_borrow:
				continue
			# Autoref probe: receiver pattern is a reference to this place.
			ref_level = step.level.borrowed()
			impl = self.methods.find_exact(method_name, ref_level)
			if impl is not None:
				adjustment = Adjustment(dereference_count=step.deref_count, then_borrow=True)
				return self._matched(receiver, method_name, impl, adjustment, step)
			probed.append(f"{spell_level(self.types, ref_level)} (autoref)")

		logger.debug("no match for %s.%s after probing %s", recv_spelled, method_name, probed)
		raise NoMatchingMethodError(
			f"no method named '{method_name}' found for receiver `{recv_spelled}`",
			method_name=method_name,
			receiver=recv_spelled,
			notes=[f"probed receiver types: {', '.join(probed)}"] if probed else [],
		)

	def try_resolve(self, receiver: ReceiverDescriptor, method_name: str) -> ResolutionOutcome:
		"""Like `resolve`, but report resolution failures as a Diagnostic."""
		try:
			return ResolutionOutcome(result=self.resolve(receiver, method_name))
		except ResolutionError as err:
			return ResolutionOutcome(diagnostic=err.to_diagnostic())

	def _by_value_adjustment(
		self,
		receiver: ReceiverDescriptor,
		step: DerefStep,
		impl: MethodImpl,
		method_name: str,
		recv_spelled: str,
	) -> Adjustment:
		# Passing a shared reference by value copies the reference, and an
		# owned receiver may simply be moved.
		if not impl.consumes_receiver or not step.borrowed:
			return Adjustment(dereference_count=step.deref_count)
		if self._is_copyable(receiver, step.level.type_id):
			return Adjustment(dereference_count=step.deref_count, implicit_copy=True)
		type_name = self.types.name_of(step.level.type_id)
		logger.debug("illegal move of %s out of %s for %s", type_name, recv_spelled, method_name)
		raise IllegalMoveOfBorrowedReceiverError(
			f"cannot move out of borrowed content: `{spell_impl(self.types, impl)}` takes `{type_name}` "
			f"by value but receiver `{recv_spelled}` only reaches it through {step.deref_count} dereference(s)",
			method_name=method_name,
			receiver=recv_spelled,
			notes=[f"`{type_name}` is not copyable"],
		)

	def _is_copyable(self, receiver: ReceiverDescriptor, ty: TypeId) -> bool:
		if ty == receiver.type_id and receiver.is_copyable is not None:
			return receiver.is_copyable
		return self.types.is_copy(ty)

	def _matched(
		self,
		receiver: ReceiverDescriptor,
		method_name: str,
		impl: MethodImpl,
		adjustment: Adjustment,
		step: DerefStep,
	) -> ResolutionResult:
		logger.debug(
			"resolved %s.%s to impl #%d at step %d (derefs=%d borrow=%s copy=%s)",
			spell_level(self.types, receiver.level),
			method_name,
			impl.impl_id,
			step.deref_count,
			adjustment.dereference_count,
			adjustment.then_borrow,
			adjustment.implicit_copy,
		)
		return ResolutionResult(
			implementation=impl,
			adjustment=adjustment,
			step_index=step.deref_count,
			matched_level=step.level,
		)


def resolve_method_call(
	types: TypeTable,
	methods: MethodTable,
	*,
	receiver: ReceiverDescriptor,
	method_name: str,
	options: Optional[ResolverOptions] = None,
) -> ResolutionResult:
	return MethodResolver(types, methods, options).resolve(receiver, method_name)


__all__ = [
	"MethodResolver",
	"ResolverOptions",
	"ReceiverDescriptor",
	"Adjustment",
	"ResolutionResult",
	"ResolutionOutcome",
	"resolve_method_call",
]
