"""Request/response schemas for task endpoints. Wire names are camelCase, as stored."""

from pydantic import BaseModel, ConfigDict, Field


class TaskCreate(BaseModel):
    """Body for POST /api/tasks. Unknown fields (e.g. userId) are ignored."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=1, max_length=1024, description="Task title")
    description: str = Field(default="", max_length=10_000, description="Optional details")


class TaskUpdate(BaseModel):
    """Body for PUT /api/tasks/{id}; every field optional, omitted fields are kept."""

    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(default=None, min_length=1, max_length=1024)
    description: str | None = Field(default=None, max_length=10_000)
    completed: bool | None = None


class TaskResponse(BaseModel):
    """A stored task."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str = Field(..., alias="userId")
    title: str
    description: str = ""
    completed: bool = False
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")
