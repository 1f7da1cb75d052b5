# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Error taxonomy for the method-resolution engine.

Every error carries a stable `reason_code` (used as the Diagnostic code)
and the phase it belongs to:

  setup    configuration errors raised while building the registries
  resolve  per-call resolution failures

Configuration errors are fatal to the setup step that raised them.
Resolution errors are ordinary failures of a single `resolve` call.
"""

from __future__ import annotations

from typing import Sequence

from autoref.core.diagnostics import Diagnostic


class AutorefError(ValueError):
	"""Base class for all engine errors."""

	reason_code = "AutorefError"
	phase = "setup"

	def __init__(self, message: str, *, notes: Sequence[str] = ()) -> None:
		super().__init__(message)
		self.message = message
		self.notes = list(notes)

	def to_diagnostic(self) -> Diagnostic:
		return Diagnostic(message=self.message, code=self.reason_code, phase=self.phase, notes=list(self.notes))


class RegistryError(AutorefError):
	"""Configuration error detected while populating a registry."""


class DuplicateTypeError(RegistryError):
	reason_code = "DuplicateType"


class UnknownTypeError(RegistryError):
	reason_code = "UnknownType"


class DuplicateViewAsError(RegistryError):
	reason_code = "DuplicateViewAs"


class CyclicViewChainError(RegistryError):
	"""A view-as edge closes a cycle (or a cycle was met while walking a chain)."""

	reason_code = "CyclicViewChain"

	def __init__(self, message: str, *, cycle: Sequence[str] = (), notes: Sequence[str] = ()) -> None:
		super().__init__(message, notes=notes)
		self.cycle = tuple(cycle)


class DuplicateReceiverPatternError(RegistryError):
	reason_code = "DuplicateReceiverPattern"


class InvalidReceiverPatternError(RegistryError):
	reason_code = "InvalidReceiverPattern"


class RegistryFrozenError(RegistryError):
	reason_code = "RegistryFrozen"


class ResolutionError(AutorefError):
	"""Raised when a method call cannot be resolved to exactly one implementation."""

	phase = "resolve"

	def __init__(self, message: str, *, method_name: str, receiver: str, notes: Sequence[str] = ()) -> None:
		super().__init__(message, notes=notes)
		self.method_name = method_name
		self.receiver = receiver


class NoMatchingMethodError(ResolutionError):
	reason_code = "NoMatchingMethod"


class IllegalMoveOfBorrowedReceiverError(ResolutionError):
	reason_code = "IllegalMoveOfBorrowedReceiver"


__all__ = [
	"AutorefError",
	"RegistryError",
	"DuplicateTypeError",
	"UnknownTypeError",
	"DuplicateViewAsError",
	"CyclicViewChainError",
	"DuplicateReceiverPatternError",
	"InvalidReceiverPatternError",
	"RegistryFrozenError",
	"ResolutionError",
	"NoMatchingMethodError",
	"IllegalMoveOfBorrowedReceiverError",
]
