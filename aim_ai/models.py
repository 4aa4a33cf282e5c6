# aim_ai/models.py
"""
Pydantic models shared across the app:
- Course / Module catalog records (immutable)
- ProgressRecord rows
- ChatMessage / GroundingLink for the tutor
- User identity as seen by the views
"""

from datetime import datetime
from enum import Enum
from typing import Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class CourseLevel(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class ModuleKind(str, Enum):
    VIDEO = "video"
    TEXT = "text"
    QUIZ = "quiz"


class Module(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    kind: ModuleKind
    content: str  # URL for video, markdown for text, question for quiz
    duration_minutes: int = Field(ge=0)


class Course(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    thumbnail: str = ""
    instructor: str
    level: CourseLevel
    modules: tuple[Module, ...] = ()
    total_students: int = Field(default=0, ge=0)

    @property
    def first_module(self) -> Optional[Module]:
        return self.modules[0] if self.modules else None

    @property
    def total_minutes(self) -> int:
        return sum(m.duration_minutes for m in self.modules)

    def module_ids(self) -> set[str]:
        return {m.id for m in self.modules}


class ProgressRecord(BaseModel):
    user_id: str
    course_id: str
    module_id: str
    completed_at: Optional[datetime] = None


class GroundingLink(BaseModel):
    title: str
    uri: str
    source: Literal["map", "web"]


class ChatMessage(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    role: Literal["user", "model"]
    text: str
    timestamp: datetime = Field(default_factory=datetime.now)
    grounding_links: list[GroundingLink] = Field(default_factory=list)


class TutorReply(BaseModel):
    text: str
    grounding_links: list[GroundingLink] = Field(default_factory=list)


class User(BaseModel):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.full_name:
            return self.full_name
        if self.email:
            return self.email.split("@")[0]
        return "Student"

    @property
    def first_name(self) -> str:
        if self.full_name:
            return self.full_name.split(" ")[0]
        return self.display_name

    @property
    def avatar_url(self) -> str:
        name = self.email or "User"
        return f"https://ui-avatars.com/api/?name={name}&background=6366f1&color=fff"
