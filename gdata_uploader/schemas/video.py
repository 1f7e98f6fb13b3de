"""Pydantic schemas for video operations"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Access-control actions in the order they are rendered, keyed by field name
ACCESS_CONTROL_ACTIONS = {
    "rate": "rate",
    "comment": "comment",
    "comment_vote": "commentVote",
    "video_respond": "videoRespond",
    "list": "list",
    "embed": "embed",
    "syndicate": "syndicate",
}


class UploadOptions(BaseModel):
    """Video attributes sent with an upload, update or token request.

    Unset access-control permissions are left out of the metadata document.
    Unrecognized keys are ignored.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    mime_type: str = "video/mp4"
    filename: Optional[str] = None
    title: str = ""
    description: str = ""
    category: str = ""
    keywords: List[str] = Field(default_factory=list)
    private: bool = False

    # accessControl permissions ("allowed", "denied", "moderated")
    rate: Optional[str] = None
    comment: Optional[str] = None
    comment_vote: Optional[str] = Field(default=None, alias="commentVote")
    video_respond: Optional[str] = Field(default=None, alias="videoRespond")
    list: Optional[str] = None
    embed: Optional[str] = None
    syndicate: Optional[str] = None

    @field_validator("keywords", mode="before")
    @classmethod
    def split_keywords(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [k.strip() for k in v.split(",") if k.strip()]
        return v

    @classmethod
    def from_options(cls, options: Optional[Any] = None) -> "UploadOptions":
        """Accept an existing UploadOptions, a dict, or None"""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.model_validate(options)

    def access_controls(self) -> List[tuple]:
        """(action, permission) pairs for every permission that is set"""
        return [
            (action, getattr(self, field))
            for field, action in ACCESS_CONTROL_ACTIONS.items()
            if getattr(self, field)
        ]


class VideoRecord(BaseModel):
    """Video entry returned by the API after an update"""
    video_id: Optional[str] = None
    title: str = ""
    description: str = ""
    category: str = ""
    keywords: List[str] = Field(default_factory=list)
    private: bool = False
    access_controls: Dict[str, str] = Field(default_factory=dict)
    raw: str = ""


class UploadToken(BaseModel):
    """Browser-based upload target returned by GetUploadToken"""
    url: str
    token: str
