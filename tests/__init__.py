"""
Test package for the PetroData Nexus API.

This package contains all test modules organized by test type:
- api: API endpoint tests
- integration: Integration tests
- unit: Unit tests for individual components
"""
