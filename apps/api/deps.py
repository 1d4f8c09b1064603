from typing import Iterator

from fastapi import Request
from sqlalchemy.orm import Session

from core.context import AppContext
from core.storage import FileStore


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_db(request: Request) -> Iterator[Session]:
    with get_context(request).session_factory() as db:
        yield db


def get_file_store(request: Request) -> FileStore:
    return get_context(request).file_store
