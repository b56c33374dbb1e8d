"""Presentation and web-framework adapters.

Framework modules are imported lazily by the caller
(``from policykit.adapters.starlette import require_permission``) so the
core package never requires the optional framework dependencies.
"""
