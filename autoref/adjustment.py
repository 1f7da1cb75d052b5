# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Receiver adjustment emitter: turn a resolver Adjustment into explicit ops."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Union

from autoref.method_resolver import Adjustment, ResolutionResult


class AdjustKind(Enum):
	DEREF = "deref"
	COPY = "copy"
	BORROW = "borrow"


@dataclass(frozen=True)
class AdjustOp:
	kind: AdjustKind

	def __str__(self) -> str:
		return self.kind.value


DEREF = AdjustOp(AdjustKind.DEREF)
COPY = AdjustOp(AdjustKind.COPY)
BORROW = AdjustOp(AdjustKind.BORROW)


def _adjustment_of(value: Union[Adjustment, ResolutionResult]) -> Adjustment:
	if isinstance(value, ResolutionResult):
		return value.adjustment
	return value


def emit(value: Union[Adjustment, ResolutionResult]) -> List[AdjustOp]:
	"""Derefs first, then the implicit copy (if any), then at most one borrow."""
	adj = _adjustment_of(value)
	ops: List[AdjustOp] = [DEREF] * adj.dereference_count
	if adj.implicit_copy:
		ops.append(COPY)
	if adj.then_borrow:
		ops.append(BORROW)
	return ops


def describe(ops: Sequence[AdjustOp]) -> str:
	if not ops:
		return "no adjustment"
	return ", ".join(str(op) for op in ops)


def render_self_expr(value: Union[Adjustment, ResolutionResult], place: str = "@") -> str:
	"""
	Render the adjusted receiver expression, with `place` standing for the
	original receiver: two derefs then a borrow of `@` is `&**@`.

	A copy does not change the spelling; `*@` passed by value is already a copy
	when the pointee is copyable.
	"""
	adj = _adjustment_of(value)
	expr = "*" * adj.dereference_count + place
	if adj.then_borrow:
		expr = "&" + expr
	return expr


__all__ = ["AdjustKind", "AdjustOp", "DEREF", "COPY", "BORROW", "emit", "describe", "render_self_expr"]
