from dataclasses import dataclass

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from core.config import Settings
from core.db import make_engine, make_session_factory
from core.errors import ConfigurationError
from core.storage import FileStore


@dataclass
class AppContext:
    """Resources shared by all requests, built once per process."""

    engine: Engine
    session_factory: sessionmaker[Session]
    file_store: FileStore

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        if not settings.database_url:
            raise ConfigurationError("DATABASE_URL is not set")
        engine = make_engine(settings.database_url)
        return cls(
            engine=engine,
            session_factory=make_session_factory(engine),
            file_store=FileStore(settings.upload_dir, settings.uploads_url_prefix),
        )

    def close(self) -> None:
        self.engine.dispose()
