"""
Shared test fixtures and utilities for docker-stats tests.

This package provides:
- sample_data: Builders for RawSample objects and Docker API stats documents
- mock_apis: Mock factories for the Docker SDK
"""

from tests.fixtures import sample_data, mock_apis

__all__ = [
    "sample_data",
    "mock_apis",
]
