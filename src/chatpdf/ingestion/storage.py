"""S3 object storage for uploaded PDFs."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from chatpdf.config import settings
from chatpdf.exceptions import DownloadError

logger = logging.getLogger(__name__)


class S3Storage:
    """Download documents from a single S3 bucket.

    Parameters
    ----------
    bucket:
        Bucket name holding the uploaded PDFs.
    region:
        AWS region of the bucket.
    client:
        Pre-built boto3 S3 client; one is created when omitted.
    """

    def __init__(
        self,
        bucket: str = settings.s3_bucket_name,
        *,
        region: str = settings.aws_region,
        client=None,
    ) -> None:
        self._bucket = bucket
        self._region = region
        self._s3_client = client or boto3.client("s3", region_name=region)

    def download(self, file_key: str) -> str:
        """Download *file_key* into a fresh temp directory.

        The caller owns the returned file and its parent directory.

        Returns
        -------
        str
            Local path of the downloaded file.

        Raises
        ------
        DownloadError
            When the key is empty, missing, or the transfer fails.
        """
        if not file_key:
            raise DownloadError("File key is required", file_key)

        filename = Path(file_key).name
        if not filename:
            raise DownloadError(f"Invalid file key: {file_key}", file_key)

        temp_dir = tempfile.mkdtemp(prefix="chatpdf_")
        local_path = os.path.join(temp_dir, filename)

        logger.info("Downloading s3://%s/%s", self._bucket, file_key)
        try:
            self._s3_client.download_file(
                Bucket=self._bucket,
                Key=file_key,
                Filename=local_path,
            )
        except ClientError as e:
            shutil.rmtree(temp_dir, ignore_errors=True)
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in ("404", "NoSuchKey"):
                raise DownloadError(f"File not found in S3: {file_key}", file_key, not_found=True) from e
            raise DownloadError(f"Failed to download from S3: {e}", file_key) from e
        except BotoCoreError as e:
            shutil.rmtree(temp_dir, ignore_errors=True)
            raise DownloadError(f"Failed to download from S3: {e}", file_key) from e
        return local_path
