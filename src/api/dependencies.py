"""FastAPI dependency injection: token checker."""

from __future__ import annotations

from fastapi import Request

from src.services.checker import TokenChecker


def get_checker(request: Request) -> TokenChecker:
    """Return the checker built at app creation."""
    return request.app.state.checker
