"""Shared route dependencies"""

from fastapi import Request

from ..database.store import CatalogStore


def get_store(request: Request) -> CatalogStore:
    """The store the application was built around"""
    return request.app.state.store
