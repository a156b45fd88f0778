"""
Pytest fixtures for the catalog tests.

Every test gets its own in-memory SQLite database.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from collections.abc import Generator
from datetime import date
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from arthaus.domains.art_piece.models import ArtPieceType
from arthaus.domains.art_piece.schemas import ArtPieceCreate
from arthaus.domains.art_piece.service import ArtPieceService
from arthaus.domains.gallery.service import GalleryService
from arthaus.main import create_app
from arthaus.shared.database.connection import build_engine, get_db, init_db

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Isolated in-memory engine with all tables created."""
    engine = build_engine("sqlite://")
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def file_session_factory(tmp_path: Path) -> Generator[sessionmaker, None, None]:
    """Sessions on a file database, each with its own connection."""
    engine = build_engine(f"sqlite:///{tmp_path / 'catalog.db'}")
    init_db(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory: sessionmaker) -> Generator[Session, None, None]:
    session = session_factory()
    yield session
    session.close()


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def gallery_service(db: Session) -> GalleryService:
    return GalleryService(db)


@pytest.fixture
def art_service(db: Session) -> ArtPieceService:
    return ArtPieceService(db, reject_tracking_dates=False)


@pytest.fixture
def modern_art(gallery_service: GalleryService):
    """Gallery "Modern Art" with no pieces."""
    return gallery_service.create_gallery("Modern Art")


@pytest.fixture
def make_piece(art_service: ArtPieceService, modern_art):
    """Factory adding a piece to "Modern Art" (or another gallery)."""

    def _make(
        title: str = "Untitled",
        piece_type: ArtPieceType = ArtPieceType.COLLECTION,
        price: float = 0.0,
        date_acquired: date = None,
        gallery_id: int = None,
        **extra,
    ):
        payload = ArtPieceCreate(
            type=piece_type,
            title=title,
            price=price,
            date_acquired=date_acquired,
            **extra,
        )
        return art_service.add_art_piece(gallery_id or modern_art.id, payload)

    return _make


# =============================================================================
# API Fixtures
# =============================================================================


@pytest.fixture
def client(session_factory: sessionmaker) -> Generator[TestClient, None, None]:
    """Test client whose requests all hit the per-test database."""
    app = create_app()

    def _get_test_db() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    with TestClient(app) as test_client:
        yield test_client
