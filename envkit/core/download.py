"""
Installer script downloads for EnvKit.

Third-party installers (Homebrew, Oh My Zsh, rustup, Bun) are published as
shell scripts. They are fetched over HTTPS with ``requests`` into a local
file which is then executed, rather than piping ``curl`` into a shell.
"""

import logging
from pathlib import Path

import requests
from requests.exceptions import RequestException

from envkit.core.exceptions import DownloadError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


def download_file(url: str, destination: Path, timeout: int = DEFAULT_TIMEOUT) -> Path:
    """
    Download a file from URL to destination.

    Args:
        url: HTTPS URL to download from
        destination: Local path to save file
        timeout: Request timeout in seconds

    Returns:
        Path to downloaded file

    Raises:
        DownloadError: If the request fails or returns an error status
        ValueError: If URL is empty or not HTTPS

    Example:
        >>> download_file("https://sh.rustup.rs", Path("/tmp/rustup-init.sh"))
        PosixPath('/tmp/rustup-init.sh')
    """
    if not url:
        raise ValueError("URL cannot be empty")
    if not url.startswith("https://"):
        raise ValueError(f"Refusing to download over insecure transport: {url}")

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Downloading {url}")

    try:
        response = requests.get(url, stream=True, timeout=timeout, allow_redirects=True)
        response.raise_for_status()

        with open(destination, "wb") as f:
            for chunk in response.iter_content(chunk_size=8192):
                if chunk:
                    f.write(chunk)
    except RequestException as e:
        destination.unlink(missing_ok=True)
        raise DownloadError(f"Download of {url} failed: {e}") from e

    logger.debug(f"Download complete: {destination}")
    return destination


__all__ = ["download_file", "DEFAULT_TIMEOUT"]
