"""Slack client facade.

Wraps the Slack SDK (slack_sdk.WebClient) with OperationResult-based APIs
for consistent error handling, and runs file uploads in the background.
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import IO, Callable, Optional, Union

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from infrastructure.configuration import settings
from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult, OperationStatus
from infrastructure.platforms.files import remove_file

logger = get_module_logger()

TRANSIENT_STATUS_CODES = (429, 500, 502, 503, 504)
AUTH_ERRORS = ("not_authed", "invalid_auth", "token_revoked", "missing_scope")


class SlackClientFacade:
    """Facade for Slack SDK client with standardized OperationResult returns.

    Args:
        token: Slack bot token for API authentication
        base_url: Slack Web API base URL

    Example:
        >>> client = SlackClientFacade(token="xoxb-...")
        >>> with open("report.csv", "rb") as fh:
        ...     result = client.upload_file(fh, "report.csv", channel="C123")
        >>> result.is_success
        True
    """

    def __init__(self, token: str, base_url: Optional[str] = None):
        """Initialize Slack client with bot token.

        Args:
            token: Slack bot token (starts with xoxb-)
            base_url: Optional override of the Web API base URL
        """
        self._client = WebClient(
            token=token, base_url=base_url or settings.slack.SLACK_API_URL
        )
        self._log = logger.bind(component="slack_client_facade")

    def upload_file(
        self,
        file: Union[str, bytes, IO[bytes]],
        filename: str,
        channel: str,
        initial_comment: Optional[str] = None,
    ) -> OperationResult:
        """Upload a file to a Slack channel.

        Args:
            file: Path, bytes or binary stream to upload
            filename: Name shown in Slack (also used as the title)
            channel: Channel ID to share the file in
            initial_comment: Optional message posted with the file

        Returns:
            OperationResult with the Slack response data on success
        """
        log = self._log.bind(channel=channel, filename=filename)

        kwargs = {}
        if initial_comment:
            kwargs["initial_comment"] = initial_comment

        try:
            response = self._client.files_upload_v2(
                channel=channel,
                file=file,
                filename=filename,
                title=filename,
                **kwargs,
            )

            if not response.get("ok"):
                error = response.get("error", "unknown_error")
                log.warning("slack_upload_failed", error=error)
                return OperationResult.permanent_error(
                    message=f"Slack API error: {error}",
                    error_code=f"SLACK_{error.upper()}",
                )

            log.debug("slack_file_uploaded")
            return OperationResult.success(
                data=response.data, message="File uploaded successfully"
            )

        except SlackApiError as e:
            error = e.response.get("error", "unknown_error")
            log.error("slack_api_error", error=error)

            if error in AUTH_ERRORS:
                return OperationResult.error(
                    OperationStatus.UNAUTHORIZED,
                    message=f"Slack API auth error: {error}",
                    error_code=f"SLACK_{error.upper()}",
                )

            if e.response.status_code in TRANSIENT_STATUS_CODES:
                return OperationResult.transient_error(
                    message=f"Slack API transient error: {error}",
                    error_code=f"SLACK_{error.upper()}",
                )

            return OperationResult.permanent_error(
                message=f"Slack API error: {error}",
                error_code=f"SLACK_{error.upper()}",
            )

        except Exception as e:
            log.exception("slack_client_error", error=str(e))
            return OperationResult.permanent_error(
                message=f"Unexpected error uploading file: {str(e)}",
                error_code="SLACK_CLIENT_ERROR",
            )

    @property
    def raw_client(self) -> WebClient:
        """Access the underlying slack_sdk WebClient."""
        return self._client


class SlackFileUploader:
    """Uploads temporary files to Slack without blocking the caller.

    Each upload runs once on a lazily created thread pool. When it finishes,
    successfully or not, the local file is deleted and the outcome logged.
    Failed uploads are not retried.

    Args:
        client_factory: Builds a facade for a token (defaults to SlackClientFacade)
        max_workers: Pool size (defaults to settings.formatting.UPLOAD_WORKERS)
    """

    def __init__(
        self,
        client_factory: Callable[[str], SlackClientFacade] = SlackClientFacade,
        max_workers: Optional[int] = None,
    ):
        self._client_factory = client_factory
        self._max_workers = max_workers or settings.formatting.UPLOAD_WORKERS
        self._executor: Optional[ThreadPoolExecutor] = None
        self._lock = threading.Lock()

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers,
                    thread_name_prefix="slack-upload",
                )
                logger.debug("upload_executor_created", max_workers=self._max_workers)
            return self._executor

    def upload(
        self,
        path: str,
        filename: str,
        channel: str,
        token: str,
        initial_comment: Optional[str] = None,
    ) -> "Future[OperationResult]":
        """Schedule an upload of ``path`` and return its future."""
        logger.debug("slack_upload_scheduled", filename=filename, channel=channel)
        return self._get_executor().submit(
            self._upload_and_cleanup, path, filename, channel, token, initial_comment
        )

    def _upload_and_cleanup(
        self,
        path: str,
        filename: str,
        channel: str,
        token: str,
        initial_comment: Optional[str],
    ) -> OperationResult:
        try:
            with open(path, "rb") as file:
                result = self._client_factory(token).upload_file(
                    file, filename, channel, initial_comment=initial_comment
                )
        except OSError as e:
            result = OperationResult.permanent_error(
                message=f"Could not read {path}: {e}",
                error_code="FILE_UNREADABLE",
            )
        except Exception as e:
            logger.exception("slack_upload_crashed", file_path=path, error=str(e))
            result = OperationResult.permanent_error(
                message=f"Unexpected error uploading file: {str(e)}",
                error_code="SLACK_CLIENT_ERROR",
            )
        finally:
            remove_file(path)

        if result.is_success:
            logger.debug("slack_upload_succeeded", file_path=path, channel=channel)
        else:
            logger.error(
                "slack_upload_failed",
                file_path=path,
                channel=channel,
                status=result.status.value,
                error=result.message,
                error_code=result.error_code,
            )
        return result

    def shutdown(self, wait: bool = True) -> None:
        """Stop the pool; a later upload creates a new one."""
        with self._lock:
            if self._executor is not None:
                self._executor.shutdown(wait=wait)
                self._executor = None
