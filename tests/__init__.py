"""
Tests for enumfactory.

Test suite covering:
- Unit tests for individual components
- Integration tests for schema loading, code generation and the CLI
"""

__all__ = []
