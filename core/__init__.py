"""Core domain logic for diabetes measurement prefill.

This package contains the reconciliation logic and domain models,
isolated from external dependencies for easy testing and reasoning.
"""
