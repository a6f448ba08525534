from sqlalchemy import Column, String, Boolean, DateTime, Text, func
from courtside.database import Base


class ComplianceSource(Base):
    __tablename__ = "compliance_sources"

    id = Column(String(64), primary_key=True, index=True)
    data_source_name = Column(String(100), nullable=False)
    terms_url = Column(String(500))
    compliance_status = Column(String(20), default="pending_review", index=True)
    reviewer = Column(String(100))
    notes = Column(Text)
    last_reviewed = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<ComplianceSource {self.data_source_name} ({self.compliance_status})>"


class Alias(Base):
    __tablename__ = "player_aliases"

    id = Column(String(64), primary_key=True, index=True)
    alias_text = Column(String(150), index=True)
    player_id = Column(String(64), index=True)
    is_auto_generated = Column(Boolean, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Alias {self.alias_text} -> {self.player_id}>"
