"""DTOs for team management (instructor-side team creation, update and search)."""

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List

from tutorhub_types.base import BaseEntityGet, EntityReference


class TeamStudent(BaseModel):
    """A student as shown inside a team."""
    id: int
    login: str
    name: Optional[str] = None
    email: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class TeamExercise(BaseModel):
    """The exercise a team belongs to."""
    id: int
    title: Optional[str] = None
    course_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class TeamBody(BaseModel):
    """
    Team as sent by the client for create and update.

    On create the id must be absent, on update it must be present.
    Students and owner are referenced by user id.
    """
    id: Optional[int] = None
    name: str = Field(..., min_length=1, max_length=250)
    short_name: str = Field(..., min_length=1, max_length=50)
    image: Optional[str] = Field(None, max_length=2048)
    exercise: Optional[EntityReference] = None
    students: List[EntityReference] = Field(default_factory=list)
    owner: Optional[EntityReference] = None


class TeamGet(BaseEntityGet):
    """Team as returned to the client."""
    name: str
    short_name: str
    image: Optional[str] = None
    exercise: TeamExercise
    students: List[TeamStudent] = Field(default_factory=list)
    owner: Optional[TeamStudent] = None


class TeamSearchUser(BaseModel):
    """User summary returned by the team formation search."""
    id: int
    login: str
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    assigned_team_id: Optional[int] = Field(
        None, description="Team of the exercise the user already belongs to"
    )

    model_config = ConfigDict(from_attributes=True)
