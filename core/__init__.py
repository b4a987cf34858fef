"""
Core module for shared domain infrastructure.

This module contains:
- Domain events, exceptions and value objects
- Event bus and transaction helpers
- Middleware components
- Observability setup
"""
