from typing import List, Optional

from pydantic import BaseModel, Field


class WorkspaceFile(BaseModel):
    file_path: str = Field(..., description="Path as uploaded by the client")
    file_content: str = Field(..., description="Full file text")


class WorkspaceState(BaseModel):
    """
    Configuration and uploaded files of one workspace.
    """

    api_key: Optional[str] = None
    system_instructions: str = ""
    model: Optional[str] = None
    prompt: Optional[str] = None
    files: List[WorkspaceFile] = Field(default_factory=list)


class WorkspaceRequest(BaseModel):
    """
    Body accepted by `POST /{provider}/workspace`.
    """

    type: str = Field(
        default="", description="api key | system instructions | model | prompt | file"
    )
    text: Optional[str] = None
    filename: Optional[str] = None
    content: Optional[str] = None


__all__ = ["WorkspaceFile", "WorkspaceRequest", "WorkspaceState"]
