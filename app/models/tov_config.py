from datetime import datetime

from sqlalchemy import DateTime, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.prospect import gen_uuid, utc_now


class TovConfig(Base):
    """Distinct tone-of-voice triples seen in requests, with the description sent to the model."""

    __tablename__ = "tov_configs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=gen_uuid)
    formality: Mapped[float] = mapped_column(Float, nullable=False)
    warmth: Mapped[float] = mapped_column(Float, nullable=False)
    directness: Mapped[float] = mapped_column(Float, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    sequences = relationship("MessageSequence", back_populates="tov_config")
