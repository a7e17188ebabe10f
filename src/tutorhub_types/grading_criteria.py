from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List

from tutorhub_types.base import BaseEntityGet


class StructuredGradingInstructionGet(BaseEntityGet):
    credits: float = 0.0
    grading_scale: Optional[str] = None
    instruction_description: Optional[str] = None
    feedback: Optional[str] = None
    usage_count: int = 0


class GradingCriterionList(BaseEntityGet):
    title: Optional[str] = None
    exercise_id: int


class GradingCriterionGet(GradingCriterionList):
    structured_grading_instructions: List[StructuredGradingInstructionGet] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
