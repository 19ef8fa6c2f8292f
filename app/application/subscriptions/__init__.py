"""
Application layer for the subscriptions bounded context.

Use cases coordinate domain entities and ports to fulfill
the CRUD operations. No framework or infrastructure imports allowed.
"""
