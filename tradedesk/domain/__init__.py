"""
Domain layer package.

Contains entities, domain services, ports and errors.
Nothing in here imports FastAPI, SQLAlchemy or any other framework.
"""
