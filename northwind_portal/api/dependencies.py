"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from northwind_portal.infrastructure.clients.northwind import NorthwindClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_northwind_client() -> NorthwindClient:
    """Provide Northwind API client instance"""
    return NorthwindClient()
