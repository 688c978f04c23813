"""
Test suite for AI-Native App Architecture.

Demonstrates testing patterns for Pydantic-based architectures:
- Domain logic tests (not validation tests)
- Immutability verification
- Business rule enforcement
- Integration tests for critical paths
"""

