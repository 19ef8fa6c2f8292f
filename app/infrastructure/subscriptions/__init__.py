"""
Infrastructure adapters for the subscriptions bounded context.

ORM tables, the filter/query builder and the SQLAlchemy repository
implementing the SubscriptionRepository port.
"""
