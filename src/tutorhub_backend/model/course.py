from sqlalchemy import (
    Column, DateTime, Enum, ForeignKey, Index, String, Table, func
)
from sqlalchemy.orm import relationship

from .base import Base, BigIntId


class Course(Base):
    __tablename__ = 'course'

    id = Column(BigIntId, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(True), nullable=False, server_default=func.now())
    title = Column(String(255), nullable=False)
    short_name = Column(String(255), unique=True)

    # Membership in these groups grants the corresponding course role
    student_group_name = Column(String(255))
    teaching_assistant_group_name = Column(String(255))
    instructor_group_name = Column(String(255))

    exercises = relationship("Exercise", back_populates="course", cascade="all, delete-orphan", lazy="select")


class Exercise(Base):
    __tablename__ = 'exercise'

    id = Column(BigIntId, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(True), nullable=False, server_default=func.now())
    title = Column(String(255), nullable=False)
    mode = Column(Enum('individual', 'team', name='exercise_mode'), nullable=False, server_default='individual')
    course_id = Column(ForeignKey('course.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False, index=True)

    course = relationship("Course", back_populates="exercises", lazy="select")
    teams = relationship("Team", back_populates="exercise", cascade="all, delete-orphan", passive_deletes=True, lazy="select")
    grading_criteria = relationship("GradingCriterion", back_populates="exercise", cascade="all, delete-orphan", passive_deletes=True, lazy="select")


team_student = Table(
    'team_student',
    Base.metadata,
    Column('team_id', ForeignKey('team.id', ondelete='CASCADE'), primary_key=True),
    Column('student_id', ForeignKey('user.id', ondelete='CASCADE'), primary_key=True),
)


class Team(Base):
    __tablename__ = 'team'
    __table_args__ = (
        Index('team_exercise_id_idx', 'exercise_id'),
    )

    id = Column(BigIntId, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(True), nullable=False, server_default=func.now(), onupdate=func.now())
    name = Column(String(250), nullable=False)
    short_name = Column(String(50), nullable=False, unique=True)
    image = Column(String(2048))
    exercise_id = Column(ForeignKey('exercise.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False)
    owner_id = Column(ForeignKey('user.id', ondelete='SET NULL'), nullable=True)

    exercise = relationship("Exercise", back_populates="teams", lazy="select")
    owner = relationship("User", foreign_keys=[owner_id], lazy="select")
    students = relationship("User", secondary=team_student, back_populates="teams", lazy="select")

    def has_student(self, user) -> bool:
        """Check whether the given user is a member of this team."""
        if user is None:
            return False
        return any(student.id == user.id for student in self.students)
