"""
Application layer for the brokerage bounded context.

Use cases coordinate domain services and ports to fulfill
business operations. Each one runs inside a single unit of work.
No framework or infrastructure imports allowed.
"""
