"""Blob Storage Implementations

Local filesystem storage for development and S3-compatible object storage.
"""

import asyncio
import logging
import os
from typing import Optional

import boto3
from botocore.exceptions import ClientError

from src.app.services.blob_storage import BlobStorage
from src.domain.base import generate_uuid

logger = logging.getLogger(__name__)

EXTENSIONS = {
    "application/pdf": ".pdf",
    "image/png": ".png",
    "image/jpeg": ".jpg",
}


def new_handle(content_type: str) -> str:
    return f"invoices/{generate_uuid()}{EXTENSIONS.get(content_type, '.bin')}"


class LocalBlobStorage(BlobStorage):
    """
    Blob storage in a local directory

    Files are served by the API under public_url (see create_app).
    """

    def __init__(self, root_dir: str, public_url: str = "/api/storage"):
        self.root_dir = os.path.abspath(root_dir)
        self.public_url = public_url.rstrip("/")
        os.makedirs(self.root_dir, exist_ok=True)

    def path_for(self, handle: str) -> str:
        path = os.path.abspath(os.path.join(self.root_dir, handle))
        if os.path.commonpath([path, self.root_dir]) != self.root_dir:
            raise ValueError(f"Invalid blob handle: {handle}")
        return path

    def _write(self, path: str, data: bytes):
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)

    async def store(self, data: bytes, content_type: str = "application/pdf") -> str:
        handle = new_handle(content_type)
        await asyncio.to_thread(self._write, self.path_for(handle), data)
        logger.info(f"Blob stored locally: {handle} ({len(data)} bytes)")
        return handle

    async def get_url(self, handle: str) -> Optional[str]:
        if not os.path.exists(self.path_for(handle)):
            return None
        return f"{self.public_url}/{handle}"

    async def delete(self, handle: str) -> None:
        path = self.path_for(handle)
        try:
            await asyncio.to_thread(os.remove, path)
            logger.info(f"Blob deleted: {handle}")
        except FileNotFoundError:
            logger.debug(f"Blob already gone: {handle}")


class S3BlobStorage(BlobStorage):
    """
    Blob storage in an S3-compatible bucket

    URLs are presigned and expire after url_expires_in seconds.
    """

    def __init__(
        self,
        bucket_name: str,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        region: Optional[str] = None,
        url_expires_in: int = 3600,
        client=None,
    ):
        self.bucket_name = bucket_name
        self.url_expires_in = url_expires_in

        if client is None:
            s3_config = {}
            if access_key_id and secret_access_key:
                s3_config["aws_access_key_id"] = access_key_id
                s3_config["aws_secret_access_key"] = secret_access_key
            if endpoint_url:
                s3_config["endpoint_url"] = endpoint_url
            if region:
                s3_config["region_name"] = region
            client = boto3.client("s3", **s3_config)
        self.s3_client = client

    async def store(self, data: bytes, content_type: str = "application/pdf") -> str:
        handle = new_handle(content_type)
        await asyncio.to_thread(
            self.s3_client.put_object,
            Bucket=self.bucket_name,
            Key=handle,
            Body=data,
            ContentType=content_type,
        )
        logger.info(f"Blob uploaded to s3://{self.bucket_name}/{handle}")
        return handle

    async def get_url(self, handle: str) -> Optional[str]:
        try:
            await asyncio.to_thread(self.s3_client.head_object, Bucket=self.bucket_name, Key=handle)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey", "NotFound"):
                return None
            raise
        return self.s3_client.generate_presigned_url(
            "get_object",
            Params={"Bucket": self.bucket_name, "Key": handle},
            ExpiresIn=self.url_expires_in,
        )

    async def delete(self, handle: str) -> None:
        await asyncio.to_thread(self.s3_client.delete_object, Bucket=self.bucket_name, Key=handle)
        logger.info(f"Blob deleted from s3://{self.bucket_name}/{handle}")


def create_blob_storage(config) -> BlobStorage:
    """
    Factory function to create the configured blob storage

    Args:
        config: ApplicationConfig

    Returns:
        S3BlobStorage when STORAGE_BACKEND is "s3", LocalBlobStorage otherwise
    """
    if config.STORAGE_BACKEND == "s3":
        return S3BlobStorage(
            bucket_name=config.STORAGE_BUCKET_NAME,
            access_key_id=config.STORAGE_ACCESS_KEY_ID,
            secret_access_key=config.STORAGE_SECRET_ACCESS_KEY,
            endpoint_url=config.STORAGE_ENDPOINT_URL,
            region=config.STORAGE_REGION,
            url_expires_in=config.STORAGE_URL_EXPIRES_IN,
        )
    return LocalBlobStorage(config.STORAGE_LOCAL_DIR, config.STORAGE_PUBLIC_URL)
