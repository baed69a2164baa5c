from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

Origin = Literal["remote", "fallback"]


# Quiz Schemas
class QuizQuestion(BaseModel):
    id: int = Field(ge=1)
    prompt: str
    options: list[str] = Field(min_length=2)
    correct_index: int

    @model_validator(mode="after")
    def correct_index_in_range(self) -> "QuizQuestion":
        if not 0 <= self.correct_index < len(self.options):
            raise ValueError(
                f"correct_index {self.correct_index} out of range for {len(self.options)} options"
            )
        return self


class QuizResult(BaseModel):
    topic: str
    questions: list[QuizQuestion] = Field(min_length=1)
    origin: Origin
    note: Optional[str] = None


# Learning Path Schemas
class LearningPathStep(BaseModel):
    id: int = Field(ge=1)
    title: str
    description: str = ""
    resources: list[str] = Field(default_factory=list)
    estimated_minutes: int = Field(default=60, ge=0)


class StepsResult(BaseModel):
    kind: Literal["steps"] = "steps"
    topic: str
    steps: list[LearningPathStep] = Field(min_length=1)
    origin: Origin
    note: Optional[str] = None

    @model_validator(mode="after")
    def steps_are_sequential(self) -> "StepsResult":
        for expected, step in enumerate(self.steps, start=1):
            if step.id != expected:
                raise ValueError(f"step ids must run 1..n, got {step.id} at position {expected}")
        return self


class ImageResult(BaseModel):
    kind: Literal["image"] = "image"
    topic: str
    media_ref: str
    media_type: str
    # raw image bytes travel with the result but never into JSON
    content: bytes = Field(default=b"", exclude=True, repr=False)


class FailureResult(BaseModel):
    kind: Literal["failure"] = "failure"
    topic: str
    message: str


LearningPathResult = Annotated[
    Union[StepsResult, ImageResult, FailureResult],
    Field(discriminator="kind"),
]


# Request Schemas
class QuizIn(BaseModel):
    topic: str = ""
    current_score: float = Field(default=0.5, description="Difficulty hint, clamped into [0, 1]")


class LearningPathIn(BaseModel):
    topic: str = ""
