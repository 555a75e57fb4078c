import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Integer, ForeignKey, Text, UniqueConstraint, CheckConstraint, Uuid
from sqlalchemy.orm import relationship
from app.database import Base


# ---------------------------
# Admin User Model
# ---------------------------
class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    email = Column(String(255), unique=True, nullable=False)
    name = Column(String(255), nullable=True)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    last_login = Column(DateTime, nullable=True)


# ---------------------------
# Submission Model
# ---------------------------
class Submission(Base):
    __tablename__ = "submissions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    student_name = Column(String(255), nullable=False)
    class_name = Column(String(20), nullable=False)
    section = Column(String(10), nullable=False)

    filename = Column(String(255), nullable=False)
    extension = Column(String(20), nullable=False)
    file_path = Column(Text, unique=True, nullable=False)
    file_url = Column(Text, nullable=False)

    uploaded_at = Column(DateTime, default=datetime.utcnow)

    mark = relationship("Mark", back_populates="submission", uselist=False)

    __table_args__ = (
        UniqueConstraint("student_name", "class_name", "section", "filename", name="unique_submission_tuple"),
    )


# ---------------------------
# Mark Model
# ---------------------------
class Mark(Base):
    __tablename__ = "marks"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    submission_id = Column(Uuid(as_uuid=True), ForeignKey("submissions.id"), unique=True, nullable=False)

    # snapshot of the submission at grading time
    student_name = Column(String(255), nullable=False)
    class_name = Column(String(20), nullable=False)
    section = Column(String(10), nullable=False)

    marks = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    submission = relationship("Submission", back_populates="mark")

    __table_args__ = (
        CheckConstraint("marks >= 0 AND marks <= 100", name="marks_range"),
    )


# ---------------------------
# File Extension Model
# ---------------------------
class FileExtension(Base):
    __tablename__ = "file_extensions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    extension = Column(String(20), unique=True, nullable=False)
    mime_type = Column(String(255), nullable=False)
    is_enabled = Column(Boolean, default=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
