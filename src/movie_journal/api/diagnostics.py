"""Storage diagnostics endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from movie_journal.database import get_db
from movie_journal.schemas.movie import StorageDiagnostics
from movie_journal.services.journal import storage_diagnostics

router = APIRouter(prefix="/diagnostics", tags=["diagnostics"])


@router.get("/db", response_model=StorageDiagnostics)
async def database_diagnostics(db: AsyncSession = Depends(get_db)) -> StorageDiagnostics:
    """Check that the database is reachable and report what it holds."""
    return StorageDiagnostics(**await storage_diagnostics(db))
