"""SQLModel implementation of the item repository port."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field as ConfigField
from sqlalchemy import DateTime, text
from sqlalchemy.pool import StaticPool
from sqlmodel import Field, Session, SQLModel, create_engine, select

from ...domain.models.claim import Claim, ClaimStatus
from ...domain.models.found_item import FoundItemRecord, FoundItemStatus
from ...domain.models.lost_item import LostItemReport, LostItemSecrets, LostItemStatus
from ...domain.ports.item_repository import ItemRepository

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LostItemRow(SQLModel, table=True):
    __tablename__ = "lost_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=_utc_now, sa_type=DateTime(timezone=True))

    # Reporter info
    user_id: int = Field(index=True)

    # Item fields
    item_type: str
    lost_location: str
    lost_time_from: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    lost_time_to: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    color: Optional[str] = None
    brand_model: Optional[str] = None
    public_description: Optional[str] = None

    # Verification, never selected for listings
    secret_info_1: Optional[str] = None
    secret_info_2: Optional[str] = None

    status: str = Field(default=LostItemStatus.OPEN.value, index=True)  # values: "open", "resolved"


class FoundItemRow(SQLModel, table=True):
    __tablename__ = "found_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=_utc_now, sa_type=DateTime(timezone=True))

    # Staff info
    admin_id: int

    # Item fields
    item_type: str
    found_location: str
    found_time: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    color: Optional[str] = None
    brand_model: Optional[str] = None
    public_description: Optional[str] = None
    photo_url: Optional[str] = None
    storage_location: Optional[str] = None

    status: str = Field(default=FoundItemStatus.AVAILABLE.value, index=True)  # values: "available", "claimed", "returned"


class ClaimRow(SQLModel, table=True):
    __tablename__ = "claims"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=_utc_now, sa_type=DateTime(timezone=True))

    # Linked records
    lost_item_id: int = Field(foreign_key="lost_items.id", index=True)
    found_item_id: int = Field(foreign_key="found_items.id", index=True)
    claimer_id: int = Field(index=True)

    verification_input_1: Optional[str] = None
    verification_input_2: Optional[str] = None

    status: str = Field(index=True)  # values: "verified", "pending"


def _to_db(value: Optional[datetime]) -> Optional[datetime]:
    """Store instants as aware UTC; naive values are taken to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _from_db(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive UTC wall-clock values
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class SQLModelConfig(BaseModel):
    """Configuration for the SQLModel repository."""

    database_url: str = ConfigField(default="sqlite:///./lost_and_found.db", description="SQLAlchemy URL")
    echo: bool = ConfigField(default=False, description="Log emitted SQL statements")
    pool_timeout: int = ConfigField(default=30, description="Seconds to wait for a pooled connection")


class SQLModelItemRepository(ItemRepository):
    """Relational repository backed by SQLModel.

    Every operation opens its own short-lived session; the engine is the
    only shared object.
    """

    def __init__(
        self,
        config: Optional[SQLModelConfig] = None,
        provider_name: str = "sql",
        **kwargs,
    ):
        """Initialize the repository.

        Args:
            config: Repository configuration
            provider_name: Name reported by the repository
            **kwargs: Configuration fields, used when no config is given
        """
        self._config = config or SQLModelConfig(**kwargs)
        self._name = provider_name
        self._engine = None
        self._initialized = False

    def _create_engine(self):
        url = self._config.database_url
        if not url.startswith("sqlite"):
            return create_engine(
                url,
                echo=self._config.echo,
                pool_pre_ping=True,
                pool_timeout=self._config.pool_timeout,
            )

        # Sessions run in worker threads via asyncio.to_thread
        options = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return create_engine(url, echo=self._config.echo, **options)

    async def initialize(self) -> None:
        """Create the engine and the tables."""
        if self._engine is None:
            self._engine = self._create_engine()

        try:
            await asyncio.to_thread(SQLModel.metadata.create_all, self._engine)
            self._initialized = True
            logger.info("✅ Database tables ready")
        except Exception as e:
            self._initialized = False
            raise ConnectionError(f"Failed to initialize database: {e}")

    async def shutdown(self) -> None:
        """Dispose of the connection pool."""
        if self._engine is not None:
            await asyncio.to_thread(self._engine.dispose)
            self._engine = None
        self._initialized = False

    def _session(self) -> Session:
        if self._engine is None:
            raise RuntimeError("Repository not initialized")
        return Session(self._engine)

    async def _run(self, func, *args):
        """Run blocking session work off the event loop."""
        return await asyncio.to_thread(func, *args)

    def _ping(self) -> bool:
        with self._session() as session:
            return session.execute(text("SELECT 1 + 1 AS solution")).scalar_one() == 2

    async def ping(self) -> bool:
        return await self._run(self._ping)

    def _insert(self, row: SQLModel) -> SQLModel:
        with self._session() as session:
            session.add(row)
            session.commit()
            session.refresh(row)
            return row

    async def add_lost_item(self, report: LostItemReport) -> LostItemReport:
        row = LostItemRow(
            user_id=report.reporter_id,
            item_type=report.item_type,
            lost_location=report.lost_location,
            lost_time_from=_to_db(report.lost_time_from),
            lost_time_to=_to_db(report.lost_time_to),
            color=report.color,
            brand_model=report.brand_model,
            public_description=report.public_description,
            secret_info_1=report.secret_info_1,
            secret_info_2=report.secret_info_2,
            status=report.status.value,
            created_at=_to_db(report.created_at),
        )
        return self._to_lost_item(await self._run(self._insert, row))

    def _get_row(self, model, row_id: int):
        with self._session() as session:
            return session.get(model, row_id)

    async def get_lost_item(self, lost_item_id: int) -> Optional[LostItemReport]:
        row = await self._run(self._get_row, LostItemRow, lost_item_id)
        return self._to_lost_item(row) if row else None

    def _select_secrets(self, lost_item_id: int):
        with self._session() as session:
            return session.exec(
                select(LostItemRow.secret_info_1, LostItemRow.secret_info_2)
                .where(LostItemRow.id == lost_item_id)
            ).first()

    async def get_lost_item_secrets(self, lost_item_id: int) -> Optional[LostItemSecrets]:
        row = await self._run(self._select_secrets, lost_item_id)
        if row is None:
            return None

        secret_info_1, secret_info_2 = row
        return LostItemSecrets(secret_info_1=secret_info_1, secret_info_2=secret_info_2)

    def _select_all(self, query) -> list:
        with self._session() as session:
            return list(session.exec(query).all())

    async def list_lost_items(self, reporter_id: Optional[int] = None) -> List[LostItemReport]:
        query = select(LostItemRow).order_by(LostItemRow.created_at.desc(), LostItemRow.id.desc())

        if reporter_id is not None:
            query = query.where(LostItemRow.user_id == reporter_id)

        rows = await self._run(self._select_all, query)
        # Listings never carry the secrets
        return [self._to_lost_item(row, with_secrets=False) for row in rows]

    async def add_found_item(self, record: FoundItemRecord) -> FoundItemRecord:
        row = FoundItemRow(
            admin_id=record.admin_id,
            item_type=record.item_type,
            found_location=record.found_location,
            found_time=_to_db(record.found_time),
            color=record.color,
            brand_model=record.brand_model,
            public_description=record.public_description,
            photo_url=record.photo_url,
            storage_location=record.storage_location,
            status=record.status.value,
            created_at=_to_db(record.created_at),
        )
        return self._to_found_item(await self._run(self._insert, row))

    async def list_available_found_items(self) -> List[FoundItemRecord]:
        query = (
            select(FoundItemRow)
            .where(FoundItemRow.status == FoundItemStatus.AVAILABLE.value)
            .order_by(FoundItemRow.id)
        )
        rows = await self._run(self._select_all, query)
        return [self._to_found_item(row) for row in rows]

    async def add_claim(self, claim: Claim) -> Claim:
        row = ClaimRow(
            lost_item_id=claim.lost_item_id,
            found_item_id=claim.found_item_id,
            claimer_id=claim.claimer_id,
            verification_input_1=claim.verification_input_1,
            verification_input_2=claim.verification_input_2,
            status=claim.status.value,
            created_at=_to_db(claim.created_at),
        )
        return self._to_claim(await self._run(self._insert, row))

    async def get_claim(self, claim_id: int) -> Optional[Claim]:
        row = await self._run(self._get_row, ClaimRow, claim_id)
        return self._to_claim(row) if row else None

    @staticmethod
    def _to_lost_item(row: LostItemRow, with_secrets: bool = True) -> LostItemReport:
        return LostItemReport(
            id=row.id,
            reporter_id=row.user_id,
            item_type=row.item_type,
            lost_location=row.lost_location,
            lost_time_from=_from_db(row.lost_time_from),
            lost_time_to=_from_db(row.lost_time_to),
            color=row.color,
            brand_model=row.brand_model,
            public_description=row.public_description,
            secret_info_1=row.secret_info_1 if with_secrets else None,
            secret_info_2=row.secret_info_2 if with_secrets else None,
            status=LostItemStatus(row.status),
            created_at=_from_db(row.created_at),
        )

    @staticmethod
    def _to_found_item(row: FoundItemRow) -> FoundItemRecord:
        return FoundItemRecord(
            id=row.id,
            admin_id=row.admin_id,
            item_type=row.item_type,
            found_location=row.found_location,
            found_time=_from_db(row.found_time),
            color=row.color,
            brand_model=row.brand_model,
            public_description=row.public_description,
            photo_url=row.photo_url,
            storage_location=row.storage_location,
            status=FoundItemStatus(row.status),
            created_at=_from_db(row.created_at),
        )

    @staticmethod
    def _to_claim(row: ClaimRow) -> Claim:
        return Claim(
            id=row.id,
            lost_item_id=row.lost_item_id,
            found_item_id=row.found_item_id,
            claimer_id=row.claimer_id,
            verification_input_1=row.verification_input_1,
            verification_input_2=row.verification_input_2,
            status=ClaimStatus(row.status),
            created_at=_from_db(row.created_at),
        )

    @property
    def provider_name(self) -> str:
        """Get the repository name."""
        return self._name

    @property
    def is_available(self) -> bool:
        """Check if the repository is ready."""
        return self._initialized
