"""Domain modules: one translator package per resource family.

Each domain keeps resource definitions in ``crds``, request and view models
in ``models``, cluster translation in ``client``, REST handlers in ``routes``
and agent-facing MCP tools in ``tools``.
"""
