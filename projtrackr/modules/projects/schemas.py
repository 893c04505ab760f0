from pydantic import BaseModel, EmailStr, field_validator
from projtrackr.modules.projects.models import TAG_VOCABULARY
from typing import Optional, List


class ProjectFieldChecks(BaseModel):
    """Format checks shared by create and update. None means "not supplied"."""

    @field_validator("vibe_link", check_fields=False)
    @classmethod
    def check_vibe_link(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.startswith("https://"):
            raise ValueError("vibe_link must start with https://")
        return value

    @field_validator("github_link", check_fields=False)
    @classmethod
    def check_github_link(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and "github.com/" not in value:
            raise ValueError("github_link must be a github.com/ URL")
        return value

    @field_validator("tags", check_fields=False)
    @classmethod
    def check_tags(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return value
        unknown = [t for t in value if t not in TAG_VOCABULARY]
        if unknown:
            raise ValueError(f"unknown tags: {', '.join(unknown)}; allowed: {', '.join(TAG_VOCABULARY)}")
        # drop repeats, keep first occurrence order
        return list(dict.fromkeys(value))


class ProjectCreate(ProjectFieldChecks):
    name: str
    email: EmailStr
    batch: str
    vibe_link: str
    github_link: str
    tags: List[str] = []


class ProjectUpdate(ProjectFieldChecks):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    batch: Optional[str] = None
    vibe_link: Optional[str] = None
    github_link: Optional[str] = None
    tags: Optional[List[str]] = None  # replaces the stored list, no union


class ProjectResponse(BaseModel):
    id: str
    user_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    batch: Optional[str] = None
    vibe_link: Optional[str] = None
    github_link: Optional[str] = None
    tags: List[str] = []
    created_at: Optional[str] = None

    class Config:
        from_attributes = True


class ProjectEnvelope(BaseModel):
    project: ProjectResponse


class ProjectListEnvelope(BaseModel):
    projects: List[ProjectResponse]


class DeleteResponse(BaseModel):
    success: bool = True
