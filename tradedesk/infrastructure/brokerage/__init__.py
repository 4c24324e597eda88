"""
Infrastructure adapters for the brokerage bounded context.

Each adapter implements a domain port (ABC) on top of a SQLAlchemy
connection that belongs to the enclosing unit of work.
"""
