from sqlalchemy import (
    Column, DateTime, ForeignKey, Index, String, func
)
from sqlalchemy.orm import relationship

from .base import Base, BigIntId


class User(Base):
    __tablename__ = 'user'

    id = Column(BigIntId, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(True), nullable=False, server_default=func.now(), onupdate=func.now())
    login = Column(String(50), nullable=False, unique=True)
    first_name = Column(String(255))
    last_name = Column(String(255))
    email = Column(String(320), unique=True)
    password = Column(String(255))

    # Relationships
    user_groups = relationship("UserGroup", back_populates="user", cascade="all, delete-orphan", lazy="select")
    user_roles = relationship("UserRole", back_populates="user", cascade="all, delete-orphan", lazy="select")
    teams = relationship("Team", secondary="team_student", back_populates="students", lazy="select")

    @property
    def name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @property
    def groups(self) -> set[str]:
        return {user_group.group_name for user_group in self.user_groups}

    @property
    def authorities(self) -> set[str]:
        return {user_role.role_id for user_role in self.user_roles}


class UserGroup(Base):
    """Membership of a user in a named group; course roles are granted through groups."""
    __tablename__ = 'user_group'
    __table_args__ = (
        Index('user_group_user_id_group_name_key', 'user_id', 'group_name', unique=True),
    )

    id = Column(BigIntId, primary_key=True, autoincrement=True)
    user_id = Column(ForeignKey('user.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False)
    group_name = Column(String(255), nullable=False, index=True)

    user = relationship('User', back_populates='user_groups')


class UserRole(Base):
    """System-wide authority of a user (ROLE_USER, ROLE_TA, ROLE_INSTRUCTOR, ROLE_ADMIN)."""
    __tablename__ = 'user_role'
    __table_args__ = (
        Index('user_role_user_id_role_id_key', 'user_id', 'role_id', unique=True),
    )

    id = Column(BigIntId, primary_key=True, autoincrement=True)
    user_id = Column(ForeignKey('user.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False)
    role_id = Column(String(50), nullable=False)

    user = relationship('User', back_populates='user_roles')
