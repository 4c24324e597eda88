"""
Infrastructure layer package.

Adapters that implement domain ports against real systems:
the relational database, password hashing and outbound email.
"""
