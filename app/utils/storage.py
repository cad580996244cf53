import logging
import os
import asyncio
from typing import Optional

from google.cloud import storage

from app.core.config import settings

logger = logging.getLogger(__name__)


class GcsStorage:
    """Workspace image storage on Google Cloud Storage. The client is created on first use."""

    def __init__(self):
        self.storage_client: storage.Client | None = None
        self.bucket: storage.bucket.Bucket | None = None
        self._initialized = False

    def _initialize_client(self):
        self._initialized = True
        if not settings.GCS_BUCKET_NAME:
            logger.error("GCS_BUCKET_NAME is not configured. GCS client not initialized.")
            return
        try:
            if settings.GOOGLE_APPLICATION_CREDENTIALS and os.path.exists(settings.GOOGLE_APPLICATION_CREDENTIALS):
                logger.info(f"Initializing GCS client from service account file: {settings.GOOGLE_APPLICATION_CREDENTIALS}")
                self.storage_client = storage.Client.from_service_account_json(
                    settings.GOOGLE_APPLICATION_CREDENTIALS
                )
            else:
                logger.info("Initializing GCS client with Application Default Credentials.")
                self.storage_client = storage.Client()

            self.bucket = self.storage_client.bucket(settings.GCS_BUCKET_NAME)
            logger.info(f"GCS Bucket {settings.GCS_BUCKET_NAME} obtained.")
        except Exception as e:
            logger.error(f"Failed to initialize Google Cloud Storage client or bucket: {e}", exc_info=True)
            self.storage_client = None
            self.bucket = None

    def _require_bucket(self) -> "storage.bucket.Bucket":
        if not self._initialized:
            self._initialize_client()
        if not self.bucket or not self.storage_client:
            raise ConnectionAbortedError("GCS not initialized")
        return self.bucket

    async def upload_bytes_async(self, content: bytes, blob_name: str, content_type: Optional[str]) -> str:
        blob = self._require_bucket().blob(blob_name)
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None,
            lambda: blob.upload_from_string(content, content_type=content_type)
        )
        logger.info(f"Uploaded {blob_name} to GCS bucket {settings.GCS_BUCKET_NAME}")
        return blob_name

    def delete_blob(self, blob_name: str):
        blob = self._require_bucket().blob(blob_name)
        if blob.exists():
            blob.delete()
            logger.info(f"Blob {blob_name} deleted from GCS bucket {settings.GCS_BUCKET_NAME}.")


gcs_storage = GcsStorage()
