"""
Infrastructure adapters for the back-office bounded context.
"""
