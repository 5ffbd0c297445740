"""Application context for dependency injection."""

from dataclasses import dataclass, field
from functools import cached_property

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine
from structlog.typing import FilteringBoundLogger

from wiki.config import Settings
from wiki.core.logging import configure_logging, get_logger
from wiki.fetchers import SurfaceFactory
from wiki.services import WikiClient


@dataclass
class AppContext:
    """Application context holding shared dependencies."""

    config: Settings
    surface_factory: SurfaceFactory | None = None
    _logging_configured: bool = field(default=False, init=False)

    @cached_property
    def db_engine(self) -> Engine:
        """Lazy initialization of the favorites database engine."""
        db_path = self.config.get_db_path()
        self.logger.debug("initializing_database", path=str(db_path))
        engine = create_engine(f"sqlite:///{db_path}")
        SQLModel.metadata.create_all(engine)
        return engine

    @cached_property
    def logger(self) -> FilteringBoundLogger:
        """Get configured structlog logger."""
        if not self._logging_configured:
            configure_logging(
                verbose=self.config.verbose, json_logs=self.config.json_logs
            )
            object.__setattr__(self, "_logging_configured", True)
        return get_logger()

    @cached_property
    def client(self) -> WikiClient:
        """Lazily built client; its background loop starts on first fetch."""
        return WikiClient(
            self.config, surface_factory=self.surface_factory, logger=self.logger
        )

    def close(self) -> None:
        if "client" in self.__dict__:
            self.client.close()
