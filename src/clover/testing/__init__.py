"""Test utilities for clover applications.

Provides an in-process ASGI test client::

    from clover.testing import TestClient
"""

from clover.testing.client import TestClient

__all__ = ["TestClient"]
