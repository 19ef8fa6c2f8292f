"""
Shared module package.

Contains cross-cutting concerns used across bounded contexts:
- Error classification and HTTP mapping
- Security middleware
- Rate limiting
- Logging configuration and request logging
"""
