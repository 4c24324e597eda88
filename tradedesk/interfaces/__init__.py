"""
Interface layer package.

FastAPI routers and Pydantic schemas, one sub-package per bounded context.
"""
