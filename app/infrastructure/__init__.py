"""
Infrastructure layer package.

Contains concrete implementations (adapters) of the ports
defined in the domain layer, plus the long-lived database handle.
This is where SQLAlchemy and the database drivers live.
"""
