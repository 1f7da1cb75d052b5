"""
autoref.core: shared registry types, diagnostics and errors.

Modules:
  - types_core: TypeId/TypeTable/ReferenceLevel primitives
  - diagnostics: Diagnostic record
  - errors: setup and resolution error taxonomy
"""
