import importlib.metadata
import os
import time
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry  # type: ignore

from javafetch.constants import (
    DEFAULT_BACKOFF_FACTOR,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_CONNECT_RETRIES,
    DEFAULT_REQUEST_TIMEOUT,
    RETRY_STATUS_FORCELIST,
)
from javafetch.exceptions import DownloadOrExtractFailure, HTTPError
from javafetch.log_utils import logger

# Cache for the User-Agent string to avoid repeated metadata lookups
_USER_AGENT_CACHE: Optional[str] = None


def get_user_agent() -> str:
    """
    Get the User-Agent string used for HTTP requests.

    Returns:
        The string `javafetch/{version}`, where `{version}` is the installed package version or `unknown` if the version cannot be determined.
    """
    global _USER_AGENT_CACHE

    if _USER_AGENT_CACHE is None:
        try:
            app_version = importlib.metadata.version("javafetch")
        except importlib.metadata.PackageNotFoundError:
            app_version = "unknown"

        _USER_AGENT_CACHE = f"javafetch/{app_version}"

    return _USER_AGENT_CACHE


def create_session() -> requests.Session:
    """
    Build a requests Session whose adapters retry connection errors and transient statuses.

    Retries are applied by urllib3 below this session; callers see only the final outcome.
    Status 404 is never retried, so catalog pagination learns about the end of data on the
    first attempt.
    """
    retry_strategy: Retry = Retry(
        total=DEFAULT_CONNECT_RETRIES,
        connect=DEFAULT_CONNECT_RETRIES,
        read=DEFAULT_CONNECT_RETRIES,
        status=DEFAULT_CONNECT_RETRIES,
        backoff_factor=DEFAULT_BACKOFF_FACTOR,
        status_forcelist=list(RETRY_STATUS_FORCELIST),
        allowed_methods=frozenset({"GET", "HEAD"}),
        raise_on_status=False,
        respect_retry_after_header=True,
    )
    adapter = HTTPAdapter(max_retries=retry_strategy)
    session = requests.Session()
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update({"User-Agent": get_user_agent()})
    return session


def fetch_json(
    session: requests.Session,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    timeout: Optional[int] = None,
) -> Any:
    """
    GET a URL and decode its JSON body.

    Parameters:
        session (requests.Session): Session used for the request (see create_session()).
        url (str): Endpoint to request.
        params (Optional[Dict[str, Any]]): Query parameters.
        timeout (Optional[int]): Request timeout in seconds; defaults to DEFAULT_REQUEST_TIMEOUT.

    Returns:
        Any: The decoded JSON document.

    Raises:
        HTTPError: On a non-2xx response (status_code set), on a transport failure
            (status_code None), or when the body is not valid JSON.
    """
    logger.debug(f"Requesting {url} with params {params}")
    try:
        response = session.get(
            url,
            params=params,
            timeout=timeout or DEFAULT_REQUEST_TIMEOUT,
            headers={"Accept": "application/json"},
        )
    except requests.RequestException as e:
        raise HTTPError(
            f"Request to {url} failed", endpoint=url, details=str(e)
        ) from e

    try:
        if not 200 <= response.status_code < 300:
            raise HTTPError(
                f"Request to {url} returned HTTP {response.status_code}",
                status_code=response.status_code,
                endpoint=url,
            )
        try:
            return response.json()
        except ValueError as e:
            raise HTTPError(
                f"Invalid JSON received from {url}",
                status_code=response.status_code,
                endpoint=url,
                details=str(e),
            ) from e
    finally:
        response.close()


def filename_from_url(url: str, default: str = "archive") -> str:
    """Return the last path segment of a URL, or `default` when it has none."""
    name = os.path.basename(urlparse(url).path)
    return name or default


def download_file(session: requests.Session, url: str, target_dir: str) -> str:
    """
    Stream a remote file into `target_dir`.

    The file is written to a temporary name and moved into place only once the body has
    been fully received; the temporary file is removed on every failure path.

    Returns:
        str: Path of the downloaded file.

    Raises:
        DownloadOrExtractFailure: On a network error, non-2xx status or I/O error.
    """
    os.makedirs(target_dir, exist_ok=True)
    download_path = os.path.join(target_dir, filename_from_url(url))
    temp_path = f"{download_path}.tmp.{os.getpid()}.{int(time.time() * 1000)}"
    response = None
    try:
        logger.debug(f"Downloading {url} to temp path: {temp_path}")
        start_time = time.time()
        response = session.get(url, stream=True, timeout=DEFAULT_REQUEST_TIMEOUT)
        response.raise_for_status()

        downloaded_bytes = 0
        with open(temp_path, "wb") as file:
            for chunk in response.iter_content(chunk_size=DEFAULT_CHUNK_SIZE):
                if chunk:
                    file.write(chunk)
                    downloaded_bytes += len(chunk)

        os.replace(temp_path, download_path)
        elapsed = time.time() - start_time
        file_size_mb = downloaded_bytes / (1024 * 1024)
        logger.debug("Download elapsed time: %.2fs for %s", elapsed, url)
        if file_size_mb >= 1.0:
            logger.info(
                f"Downloaded: {os.path.basename(download_path)} ({file_size_mb:.1f} MB)"
            )
        else:
            logger.info(
                f"Downloaded: {os.path.basename(download_path)} ({downloaded_bytes} bytes)"
            )
        return download_path
    except requests.exceptions.RequestException as e:
        raise DownloadOrExtractFailure(
            f"Network error downloading {url}", url=url, details=str(e)
        ) from e
    except OSError as e:
        raise DownloadOrExtractFailure(
            f"File I/O error downloading {url}", url=url, details=str(e)
        ) from e
    finally:
        if os.path.exists(temp_path):
            try:
                os.remove(temp_path)
            except OSError as e_rm:
                logger.warning(
                    f"Error removing temporary file {temp_path} after failure: {e_rm}"
                )
        if response is not None:
            response.close()
