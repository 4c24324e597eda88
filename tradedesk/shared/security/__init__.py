"""
Security package.

Secure response headers, rate limiting and access tokens.
"""
