"""Media upload schemas"""

from enum import Enum
from pydantic import BaseModel, Field


class MediaKind(str, Enum):
    PHOTO = "photo"
    VIDEO = "video"
    DOCUMENT = "document"


class UploadUrlRequest(BaseModel):
    kind: MediaKind = Field(..., description="photo, video or document")
    filename: str = Field(..., min_length=1, max_length=255, description="Original file name")
    content_type: str = Field(..., description="MIME type of the file")


class UploadUrlResponse(BaseModel):
    upload_url: str = Field(..., description="Pre-signed PUT URL")
    key: str = Field(..., description="Object key inside the bucket")
    bucket: str
    public_url: str = Field(..., description="URL to store on the project or profile")
    expires_in: int = Field(..., description="Seconds until the upload URL expires")
