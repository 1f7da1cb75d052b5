# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
autoref: receiver-based method resolution with autoderef and autoref.

Given a receiver type, a method name and a table of implementations keyed
on exact receiver patterns, pick the one implementation a method call
binds to and the deref/borrow adjustment applied to the receiver.

Modules:
  core.types_core   type registry and reference levels
  method_registry   method table
  deref_chain       view-as chains and autoderef steps
  method_resolver   the resolver
  adjustment        adjustment emitter
  spelling          `&&X` style receiver spellings
"""

from autoref.adjustment import AdjustKind, AdjustOp, describe, emit, render_self_expr
from autoref.core.errors import (
	AutorefError,
	CyclicViewChainError,
	DuplicateReceiverPatternError,
	DuplicateTypeError,
	DuplicateViewAsError,
	IllegalMoveOfBorrowedReceiverError,
	InvalidReceiverPatternError,
	NoMatchingMethodError,
	RegistryError,
	RegistryFrozenError,
	ResolutionError,
	UnknownTypeError,
)
from autoref.core.types_core import ReferenceLevel, TypeDef, TypeId, TypeTable
from autoref.deref_chain import DerefStep, autoderef_steps, build_chain
from autoref.method_registry import BindingMode, MethodImpl, MethodTable
from autoref.method_resolver import (
	Adjustment,
	MethodResolver,
	ReceiverDescriptor,
	ResolutionOutcome,
	ResolutionResult,
	ResolverOptions,
	resolve_method_call,
)
from autoref.spelling import SpellingError, parse_receiver, spell_impl, spell_level

__all__ = [
	"AdjustKind",
	"AdjustOp",
	"Adjustment",
	"AutorefError",
	"BindingMode",
	"CyclicViewChainError",
	"DerefStep",
	"DuplicateReceiverPatternError",
	"DuplicateTypeError",
	"DuplicateViewAsError",
	"IllegalMoveOfBorrowedReceiverError",
	"InvalidReceiverPatternError",
	"MethodImpl",
	"MethodResolver",
	"MethodTable",
	"NoMatchingMethodError",
	"ReceiverDescriptor",
	"ReferenceLevel",
	"RegistryError",
	"RegistryFrozenError",
	"ResolutionError",
	"ResolutionOutcome",
	"ResolutionResult",
	"ResolverOptions",
	"SpellingError",
	"TypeDef",
	"TypeId",
	"TypeTable",
	"UnknownTypeError",
	"autoderef_steps",
	"build_chain",
	"describe",
	"emit",
	"parse_receiver",
	"render_self_expr",
	"resolve_method_call",
	"spell_impl",
	"spell_level",
]
