from sqlalchemy import (
    Column, Float, ForeignKey, Integer, String
)
from sqlalchemy.orm import relationship

from .base import Base, BigIntId


class GradingCriterion(Base):
    __tablename__ = 'grading_criterion'

    id = Column(BigIntId, primary_key=True, autoincrement=True)
    title = Column(String(255))
    exercise_id = Column(ForeignKey('exercise.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False, index=True)

    exercise = relationship("Exercise", back_populates="grading_criteria", lazy="select")
    structured_grading_instructions = relationship(
        "StructuredGradingInstruction",
        back_populates="grading_criterion",
        cascade="all, delete-orphan",
        order_by="StructuredGradingInstruction.id",
        lazy="select",
    )


class StructuredGradingInstruction(Base):
    __tablename__ = 'structured_grading_instruction'

    id = Column(BigIntId, primary_key=True, autoincrement=True)
    credits = Column(Float, nullable=False, default=0.0)
    grading_scale = Column(String(255))
    instruction_description = Column(String(16384))
    feedback = Column(String(16384))
    usage_count = Column(Integer, nullable=False, default=0)
    grading_criterion_id = Column(ForeignKey('grading_criterion.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False, index=True)

    grading_criterion = relationship("GradingCriterion", back_populates="structured_grading_instructions")
