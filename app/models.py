from sqlalchemy import Column, Integer, String, Float, ForeignKey
from sqlalchemy.orm import relationship
from .db import Base


class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    location = Column(String, nullable=True)
    slope = Column(Integer, nullable=False, default=113)
    rating = Column(Float, nullable=False, default=72.0)

    holes = relationship(
        "Hole",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="Hole.number",
    )


class Hole(Base):
    __tablename__ = "holes"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False)

    number = Column(Integer, nullable=False)   # 1..18
    par = Column(Integer, nullable=False)      # 3/4/5
    rank = Column(Integer, nullable=False)     # HCP hoyo 1..18

    course = relationship("Course", back_populates="holes")
