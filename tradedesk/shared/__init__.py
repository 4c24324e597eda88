"""
Shared module package.

Contains cross-cutting concerns used across bounded contexts:
- Error handling and mapping
- Security middleware and authentication
- Rate limiting
- Logging configuration
"""
