# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for registry setup and method resolution.

A Diagnostic is the data form of an engine error: a message, the stable
reason code of the error that produced it and the phase it was raised in.
Reporting layers render these; the engine never prints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Diagnostic:
	"""Represents an engine diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	# "setup" for registry/configuration problems, "resolve" for per-call
	# resolution failures.
	phase: str | None = None
	severity: str = "error"
	notes: list[str] = field(default_factory=list)

	def to_dict(self) -> dict[str, Any]:
		return {
			"message": self.message,
			"code": self.code,
			"phase": self.phase,
			"severity": self.severity,
			"notes": list(self.notes),
		}

	def format_human(self) -> str:
		head = f"{self.severity}[{self.code}]" if self.code else self.severity
		lines = [f"{head}: {self.message}"]
		lines.extend(f"  note: {note}" for note in self.notes)
		return "\n".join(lines)


__all__ = ["Diagnostic"]
