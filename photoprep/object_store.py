"""
Object stores - upload processed images to remote blob storage.

Both backends share the same interface:

    resolve()                                               -> None
    put(local_path, remote_path, cache_max_age, token=None) -> None
    list_hint(prefix)                                       -> str
"""

import logging
import mimetypes
from typing import List, Optional, Union

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from sh import Command, CommandNotFound, ErrorReturnCode

from .config import S3Config, UploadConfig
from .errors import ConfigurationError, ToolError, UploadError


class BlobCliStore:
    """
    Uploads through the Vercel CLI (`vercel blob put`).

    A locally installed `vercel` is preferred; when its version probe fails
    the CLI is fetched on demand through `npx`.
    """

    LOCAL_COMMAND = 'vercel'
    RUNNER_COMMAND = 'npx'
    RUNNER_ARGS = ('-y', 'vercel@latest')

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.command: Optional[str] = None
        self.base_args: List[str] = []

    @property
    def display(self) -> str:
        """Command line prefix as an operator would type it."""
        if self.command is None:
            return self.LOCAL_COMMAND
        return ' '.join([self.command, *self.base_args])

    def _local_available(self) -> bool:
        try:
            Command(self.LOCAL_COMMAND)('--version')
        except (ErrorReturnCode, CommandNotFound, OSError):
            return False
        return True

    def resolve(self) -> None:
        """Pick the executable once per run."""
        if self.command is not None:
            return

        if self._local_available():
            self.command, self.base_args = self.LOCAL_COMMAND, []
        else:
            self.command, self.base_args = self.RUNNER_COMMAND, list(self.RUNNER_ARGS)
        self.logger.info(f"Using blob CLI: {self.display}")

    def build_args(
        self,
        local_path: str,
        remote_path: str,
        cache_max_age: int,
        token: Optional[str] = None
    ) -> List[str]:
        args = [
            *self.base_args,
            'blob', 'put', str(local_path),
            '--pathname', remote_path,
            '--cache-control-max-age', str(cache_max_age),
            '--force',
        ]
        if token:
            args.extend(['--rw-token', token])
        return args

    def put(
        self,
        local_path: str,
        remote_path: str,
        cache_max_age: int,
        token: Optional[str] = None
    ) -> None:
        """Upload one file, streaming the CLI output to the console."""
        self.resolve()
        args = self.build_args(local_path, remote_path, cache_max_age, token)
        try:
            Command(self.command)(*args, _fg=True)
        except ErrorReturnCode as e:
            raise ToolError(self.command, getattr(e, 'exit_code', None)) from e
        except (CommandNotFound, OSError) as e:
            raise ToolError(self.command, reason=str(e) or 'command not found') from e

    def list_hint(self, prefix: str) -> str:
        return f'{self.display} blob list --prefix "{prefix}/" --limit 1000'


class S3ObjectStore:
    """
    Uploads to an S3-compatible bucket with boto3.
    """

    def __init__(self, config: S3Config, logger: Optional[logging.Logger] = None):
        """
        Initialize S3 store.

        Args:
            config: S3 configuration
            logger: Optional logger instance
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)

        self._client = boto3.client(
            's3',
            endpoint_url=config.endpoint,
            aws_access_key_id=config.access_key,
            aws_secret_access_key=config.secret_key,
            region_name=config.region,
            config=Config(
                signature_version='s3v4',
                s3={'addressing_style': 'path'}
            ),
            verify=config.verify_ssl
        )

    @property
    def client(self):
        """Return the underlying boto3 client."""
        return self._client

    def resolve(self) -> None:
        self.logger.info(f"Using S3 bucket: {self.config.bucket}")

    def put(
        self,
        local_path: str,
        remote_path: str,
        cache_max_age: int,
        token: Optional[str] = None
    ) -> None:
        """Upload one file. Existing objects are overwritten."""
        if token:
            self.logger.debug("Blob token ignored by the s3 store")

        content_type = mimetypes.guess_type(str(local_path))[0] or 'application/octet-stream'
        try:
            self._client.upload_file(
                str(local_path),
                self.config.bucket,
                remote_path,
                ExtraArgs={
                    'CacheControl': f"public, max-age={cache_max_age}",
                    'ContentType': content_type,
                }
            )
        except (S3UploadFailedError, ClientError, BotoCoreError) as e:
            raise UploadError(f"Upload of {local_path} to s3://{self.config.bucket}/{remote_path} failed: {e}") from e

    def list_hint(self, prefix: str) -> str:
        hint = f"aws s3 ls s3://{self.config.bucket}/{prefix}/"
        if self.config.endpoint:
            hint += f" --endpoint-url {self.config.endpoint}"
        return hint


ObjectStore = Union[BlobCliStore, S3ObjectStore]


def create_object_store(config: UploadConfig, logger: Optional[logging.Logger] = None) -> ObjectStore:
    """Instantiate the store selected by config.store."""
    if config.store == 'vercel':
        return BlobCliStore(logger=logger)
    if config.store == 's3':
        return S3ObjectStore(config.s3, logger=logger)
    raise ConfigurationError(f"Unknown blob store: {config.store}")
