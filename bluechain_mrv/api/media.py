"""Media upload endpoints"""

from fastapi import APIRouter, Depends, status

from bluechain_mrv.api.dependencies import get_current_user
from bluechain_mrv.schemas.media import UploadUrlRequest, UploadUrlResponse
from bluechain_mrv.services.media_storage_service import MediaStorageService
from bluechain_mrv.services.role_gate import Caller

router = APIRouter(prefix="/api/v1/media", tags=["Media"])


def get_media_storage() -> MediaStorageService:
    return MediaStorageService()


@router.post("/upload-url", response_model=UploadUrlResponse, status_code=status.HTTP_200_OK)
async def create_upload_url(
    upload_request: UploadUrlRequest,
    caller: Caller = Depends(get_current_user),
    storage: MediaStorageService = Depends(get_media_storage),
):
    """
    Get a pre-signed URL for uploading a project photo, video or document

    The returned **public_url** is what goes into `photo_urls` / `video_url`
    """
    result = storage.generate_upload_url(
        user_id=caller.user_id,
        kind=upload_request.kind,
        filename=upload_request.filename,
        content_type=upload_request.content_type,
    )
    return UploadUrlResponse(**result)
