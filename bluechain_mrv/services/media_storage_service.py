"""S3 service for project media and registration document uploads"""

import logging
import os
import time
from typing import Dict, Optional
from uuid import UUID

import boto3
from botocore.exceptions import ClientError
from botocore.config import Config

from bluechain_mrv.config import settings
from bluechain_mrv.exceptions import StorageServiceError, ValidationError
from bluechain_mrv.schemas.media import MediaKind

logger = logging.getLogger(__name__)


class MediaStorageService:
    """Issues pre-signed upload URLs; the client uploads directly to S3"""

    ALLOWED_MIME_TYPES = {
        MediaKind.PHOTO: {"image/jpeg", "image/png", "image/webp", "image/heic"},
        MediaKind.VIDEO: {"video/mp4", "video/quicktime", "video/webm"},
        MediaKind.DOCUMENT: {"application/pdf", "image/jpeg", "image/png"},
    }

    def __init__(self):
        """Initialize S3 client with retry configuration"""
        retry_config = Config(
            retries={
                "max_attempts": 3,
                "mode": "standard",
            },
            connect_timeout=5,
            read_timeout=10,
        )

        client_kwargs = {
            "region_name": settings.aws_region,
            "config": retry_config,
        }

        # Add credentials if provided (not needed for IAM roles)
        if settings.aws_access_key_id and settings.aws_secret_access_key:
            client_kwargs["aws_access_key_id"] = settings.aws_access_key_id
            client_kwargs["aws_secret_access_key"] = settings.aws_secret_access_key

        # Use custom endpoint for local development (MinIO)
        if settings.aws_endpoint_url:
            client_kwargs["endpoint_url"] = settings.aws_endpoint_url

        try:
            self.s3_client = boto3.client("s3", **client_kwargs)
        except Exception as e:
            logger.error(f"Failed to initialize S3 client: {e}")
            raise StorageServiceError(f"Failed to initialize S3 client: {e}")

    @staticmethod
    def bucket_for(kind: MediaKind) -> str:
        return {
            MediaKind.PHOTO: settings.photo_bucket,
            MediaKind.VIDEO: settings.video_bucket,
            MediaKind.DOCUMENT: settings.document_bucket,
        }[kind]

    def validate_content_type(self, kind: MediaKind, content_type: str) -> None:
        """
        Raises:
            ValidationError: content type not accepted for this kind of media
        """
        allowed = self.ALLOWED_MIME_TYPES[kind]
        if content_type not in allowed:
            raise ValidationError(
                f"content_type {content_type} not allowed for {kind.value}. "
                f"Allowed types: {', '.join(sorted(allowed))}",
                field="content_type",
            )

    @staticmethod
    def generate_key(user_id: UUID, filename: str, timestamp_ms: Optional[int] = None) -> str:
        """
        Generate an object key following the structure:
        {user_id}/{timestamp_ms}.{extension}
        """
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        extension = os.path.splitext(filename)[1].lstrip(".").lower()
        if not extension:
            raise ValidationError("filename must have an extension", field="filename")
        return f"{user_id}/{timestamp_ms}.{extension}"

    def public_url(self, bucket: str, key: str) -> str:
        if settings.aws_endpoint_url:
            # Local development with MinIO
            return f"{settings.aws_endpoint_url}/{bucket}/{key}"
        return f"https://{bucket}.s3.{settings.aws_region}.amazonaws.com/{key}"

    def generate_upload_url(
        self,
        user_id: UUID,
        kind: MediaKind,
        filename: str,
        content_type: str,
    ) -> Dict[str, object]:
        """
        Generate a pre-signed PUT URL for one file.

        Returns:
            Dict with upload_url, key, bucket, public_url and expires_in

        Raises:
            ValidationError: bad content type or filename
            StorageServiceError: S3 refused to sign the request
        """
        self.validate_content_type(kind, content_type)
        bucket = self.bucket_for(kind)
        key = self.generate_key(user_id, filename)
        expiration = settings.upload_url_expiration_seconds

        try:
            upload_url = self.s3_client.generate_presigned_url(
                "put_object",
                Params={
                    "Bucket": bucket,
                    "Key": key,
                    "ContentType": content_type,
                    "CacheControl": "max-age=3600",
                },
                ExpiresIn=expiration,
            )
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error(f"S3 ClientError generating pre-signed URL: {error_code} - {e}")
            raise StorageServiceError(f"Failed to generate upload URL: {error_code}")

        logger.info(f"Generated {kind.value} upload URL for key {bucket}/{key}")

        return {
            "upload_url": upload_url,
            "key": key,
            "bucket": bucket,
            "public_url": self.public_url(bucket, key),
            "expires_in": expiration,
        }

    def check_bucket(self, bucket: str) -> str:
        """Return a connectivity status string for the health endpoint"""
        try:
            self.s3_client.head_bucket(Bucket=bucket)
            return "connected"
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code == "404":
                return f"bucket_not_found: {bucket}"
            return f"disconnected: {error_code}"
