"""
HTTP interface for the subscriptions bounded context.
"""
