# === backend/app/models/project.py ===
from sqlalchemy import Column, Integer, String, Boolean, DateTime, func
from sqlalchemy.orm import relationship
from app.db.database import Base

class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    base_url = Column(String, nullable=False, default="/api/v1")
    owner_id = Column(String, nullable=True, index=True)

    # project-wide authentication policy
    auth_enabled = Column(Boolean, nullable=False, default=False)
    auth_token = Column(String, nullable=True)
    auth_header_name = Column(String, nullable=False, default="Authorization")
    auth_token_prefix = Column(String, nullable=False, default="Bearer")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    endpoints = relationship(
        "Endpoint",
        back_populates="project",
        cascade="all, delete-orphan",
    )
