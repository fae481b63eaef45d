"""
Gallery storage.

GalleryStore is the contract the flow controller saves finished characters
through; InMemoryGallery is the process-local implementation.
"""

import asyncio
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
from uuid import uuid4

from pydantic import BaseModel, Field, field_serializer

from shared.logging import get_logger

logger = get_logger("gallery")


class GalleryRecord(BaseModel):
    """A finished character as stored in the gallery."""

    name: str
    age: int
    height: int
    weight: int
    source_photo: Optional[str] = Field(default=None, description="Photo data URI")
    cartoon_image: str
    generation_cost: Decimal = Field(default=Decimal("0.00"), ge=0)
    style: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_serializer("generation_cost")
    def serialize_decimal(self, value: Decimal) -> str:
        """Serialize Decimal to string."""
        return str(value)

    @field_serializer("created_at")
    def serialize_datetime(self, value: datetime) -> str:
        """Serialize datetime to ISO format string."""
        return value.isoformat()


class GalleryStore(ABC):
    @abstractmethod
    async def save(self, record: GalleryRecord) -> str:
        """Persist a record and return its gallery id."""
        raise NotImplementedError

    @abstractmethod
    async def get(self, gallery_id: str) -> Optional[GalleryRecord]:
        raise NotImplementedError

    @abstractmethod
    async def list_records(self) -> List[Tuple[str, GalleryRecord]]:
        """(gallery_id, record) pairs, oldest first."""
        raise NotImplementedError


class InMemoryGallery(GalleryStore):
    """Gallery kept in process memory, newest last."""

    def __init__(self) -> None:
        self._records: Dict[str, GalleryRecord] = {}
        self._lock = asyncio.Lock()

    async def save(self, record: GalleryRecord) -> str:
        gallery_id = str(uuid4())
        async with self._lock:
            self._records[gallery_id] = record
        logger.info(
            f"Saved character '{record.name}' to gallery",
            extra={"gallery_id": gallery_id, "style": record.style, "generation_cost": float(record.generation_cost)}
        )
        return gallery_id

    async def get(self, gallery_id: str) -> Optional[GalleryRecord]:
        async with self._lock:
            return self._records.get(gallery_id)

    async def list_records(self) -> List[Tuple[str, GalleryRecord]]:
        async with self._lock:
            return list(self._records.items())

    def __len__(self) -> int:
        return len(self._records)
