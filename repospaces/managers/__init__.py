"""Workspace managers.

Managers own in-memory state and delegate I/O to injected collaborators.
They raise builtin exception categories (``LookupError``, ``ValueError``)
and let collaborator failures propagate -- turning them into user-facing
output is the CLI's responsibility.
"""
