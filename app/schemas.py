"""Request bodies for the JSON API (field names follow the SPA's camelCase)."""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SignupRequest(_Body):
    email: str = ""
    password: str = ""
    user_type: str = Field("", alias="userType")


class LoginRequest(_Body):
    email: str = ""
    password: str = ""


class TokenRequest(_Body):
    token: str = ""


class EmailRequest(_Body):
    email: str = ""


class ResetPasswordRequest(_Body):
    token: str = ""
    new_password: str = Field("", alias="newPassword")


class LifestyleSubmitRequest(_Body):
    responses: Dict[str, Any]


class VideoUploadRequest(_Body):
    video_url: Optional[str] = Field(None, alias="videoUrl")
    video_data: Optional[str] = Field(None, alias="videoData")
    file_name: Optional[str] = Field(None, alias="fileName")
    file_type: Optional[str] = Field(None, alias="fileType")


class VideoProcessRequest(_Body):
    session_id: str = Field(..., alias="sessionId")


class TranscriptCreateRequest(_Body):
    video_session_id: str = Field(..., alias="videoSessionId")
    content: str
