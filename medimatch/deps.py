# medimatch/deps.py
from fastapi import Request

from .repos import RecordStore


def get_store(request: Request) -> RecordStore:
    """The store built once in the app lifespan."""
    return request.app.state.store
