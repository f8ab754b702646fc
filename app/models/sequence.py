from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, JSONType
from app.models.prospect import gen_uuid, utc_now


class MessageSequence(Base):
    __tablename__ = "message_sequences"
    __table_args__ = (
        Index(
            "ix_message_sequences_lookup",
            "prospect_id",
            "tov_config_id",
            "sequence_length",
            "prompt_version",
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=gen_uuid)
    prospect_id: Mapped[str] = mapped_column(String(36), ForeignKey("prospects.id", ondelete="CASCADE"), nullable=False)
    tov_config_id: Mapped[str] = mapped_column(String(36), ForeignKey("tov_configs.id", ondelete="RESTRICT"), nullable=False)
    company_context: Mapped[str] = mapped_column(Text, nullable=False)
    sequence_length: Mapped[int] = mapped_column(Integer, nullable=False)
    prompt_version: Mapped[str] = mapped_column(String(32), nullable=False)
    messages: Mapped[list] = mapped_column(JSONType, nullable=False)
    analysis: Mapped[dict] = mapped_column(JSONType, nullable=False)
    confidence: Mapped[float] = mapped_column(Float, nullable=False)
    role_hint: Mapped[str | None] = mapped_column(String(32), nullable=True)  # target persona
    strategy: Mapped[dict | None] = mapped_column(JSONType, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    prospect = relationship("Prospect", back_populates="sequences")
    tov_config = relationship("TovConfig", back_populates="sequences")
    ai_generations = relationship("AIGeneration", back_populates="sequence")
