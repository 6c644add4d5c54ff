# === backend/app/models/endpoint.py ===
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, Text, DateTime, func
from sqlalchemy.orm import relationship
from app.db.database import Base

class Endpoint(Base):
    __tablename__ = "endpoints"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    path = Column(String, nullable=False)
    method = Column(String, nullable=False, default="GET")
    status_code = Column(Integer, nullable=False, default=200)
    response_body = Column(Text, nullable=False, default='{"message": "Hello World"}')
    description = Column(String, nullable=True)
    requires_auth = Column(Boolean, nullable=True, default=None)  # null inherits the project setting
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    project = relationship("Project", back_populates="endpoints")
