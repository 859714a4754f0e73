"""
Quadratic - typed client for the quadratic-funding contract.

Messages and query responses (with their JSON schemas) live in
``messages``; deployment and the per-instance queries and actions in
``contract``.
"""
