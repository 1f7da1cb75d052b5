# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from autoref.adjustment import BORROW, COPY, DEREF, AdjustKind, describe, emit, render_self_expr
from autoref.method_resolver import Adjustment, ReceiverDescriptor


@pytest.mark.parametrize(
	"adjustment, ops, rendered",
	[
		(Adjustment(), [], "@"),
		(Adjustment(then_borrow=True), [BORROW], "&@"),
		(Adjustment(dereference_count=2), [DEREF, DEREF], "**@"),
		(Adjustment(dereference_count=2, then_borrow=True), [DEREF, DEREF, BORROW], "&**@"),
		(Adjustment(dereference_count=1, implicit_copy=True), [DEREF, COPY], "*@"),
	],
)
def test_emit_and_render(adjustment, ops, rendered) -> None:
	assert emit(adjustment) == ops
	assert render_self_expr(adjustment) == rendered


def test_describe_ops() -> None:
	assert describe([]) == "no adjustment"
	assert describe(emit(Adjustment(dereference_count=1, then_borrow=True))) == "deref, borrow"
	assert [op.kind for op in emit(Adjustment(dereference_count=1, implicit_copy=True))] == [
		AdjustKind.DEREF,
		AdjustKind.COPY,
	]


def test_emit_accepts_resolution_result(auto_ref_world) -> None:
	z = auto_ref_world.types.lookup("Z")
	res = auto_ref_world.resolver.resolve(ReceiverDescriptor(z), "refm")
	assert emit(res) == [DEREF, DEREF, BORROW]
	assert render_self_expr(res, place="z") == "&**z"
