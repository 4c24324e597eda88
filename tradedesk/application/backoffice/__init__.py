"""
Application layer for the back-office bounded context.
"""
