"""
Shared module package.

Contains cross-cutting concerns used across bounded contexts:
- Error handling and problem mapping
- Security middleware
- Rate limiting
- Request timeouts
- Logging configuration
"""
