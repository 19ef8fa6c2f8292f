"""
Subscriptions bounded context: domain layer.

This module contains all domain logic for recurring-payment records:
- Subscription entity and its enumerations
- The closed error taxonomy
- Persistence ports
- Billing-cycle arithmetic used for statistics
"""
