"""
Download of zipped GTFS feeds, reusing the cached copy of a feed that has
not changed since the last download.
"""
import json
import os
import shutil
import tempfile
import zipfile
from typing import Optional, Tuple

import requests

from tripfinder import config
from tripfinder.exceptions import FeedDownloadError
from tripfinder.logger import get_logger

logger = get_logger("download")

REQUEST_TIMEOUT = 60


def _get_metadata_path(cache_dir: str) -> str:
    return os.path.join(cache_dir, config.METADATA_FILENAME)


def _load_metadata(cache_dir: str) -> Optional[dict]:
    """Load the ETag / Last-Modified pair stored by the previous download."""
    metadata_path = _get_metadata_path(cache_dir)
    if not os.path.exists(metadata_path):
        return None
    try:
        with open(metadata_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Failed to load metadata from {metadata_path}: {e}")
        return None


def _save_metadata(cache_dir: str, etag: Optional[str], last_modified: Optional[str]) -> None:
    metadata_path = _get_metadata_path(cache_dir)
    os.makedirs(cache_dir, exist_ok=True)
    try:
        with open(metadata_path, 'w', encoding='utf-8') as f:
            json.dump({'etag': etag, 'last_modified': last_modified}, f, indent=2)
    except OSError as e:
        logger.warning(f"Failed to save metadata to {metadata_path}: {e}")


def _conditional_headers(metadata: Optional[dict]) -> dict:
    headers = {}
    if not metadata:
        return headers
    if metadata.get('etag'):
        headers['If-None-Match'] = metadata['etag']
    if metadata.get('last_modified'):
        headers['If-Modified-Since'] = metadata['last_modified']
    return headers


def _check_if_modified(feed_url: str, cache_dir: str) -> Tuple[bool, Optional[str], Optional[str]]:
    """
    Ask the server whether the feed changed since the cached download.
    Returns (is_modified, etag, last_modified). Any failure counts as modified.
    """
    metadata = _load_metadata(cache_dir)
    headers = _conditional_headers(metadata)
    if not headers:
        return True, None, None

    try:
        response = requests.head(feed_url, headers=headers, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as e:
        logger.warning(f"Failed to check if feed has been modified: {e}, proceeding with download")
        return True, None, None

    if response.status_code == 304:
        logger.info("Feed has not been modified (304 Not Modified)")
        return False, metadata.get('etag'), metadata.get('last_modified')
    if response.status_code == 200:
        return True, response.headers.get('ETag'), response.headers.get('Last-Modified')

    logger.warning(f"Unexpected response status {response.status_code} when checking for modifications, "
                   f"proceeding with download")
    return True, None, None


def _is_feed_root(path: str) -> bool:
    return all(os.path.exists(os.path.join(path, name)) for name in config.REQUIRED_FEED_FILES)


def _find_feed_root(extract_dir: str) -> str:
    """Feeds are sometimes zipped inside a single top-level folder."""
    if _is_feed_root(extract_dir):
        return extract_dir

    entries = [entry for entry in os.listdir(extract_dir) if not entry.startswith(('.', '__'))]
    if len(entries) == 1:
        nested = os.path.join(extract_dir, entries[0])
        if os.path.isdir(nested) and _is_feed_root(nested):
            return nested
    return extract_dir


def _extract_feed(feed_url: str, content: bytes) -> str:
    """Unzip the feed into a new temporary directory and return that directory."""
    temp_dir = tempfile.mkdtemp(prefix='gtfs_trips_')
    try:
        zip_filename = os.path.join(temp_dir, 'feed.zip')
        with open(zip_filename, 'wb') as file:
            file.write(content)

        with zipfile.ZipFile(zip_filename, 'r') as zip_ref:
            zip_ref.extractall(temp_dir)
        os.remove(zip_filename)
    except Exception as e:
        logger.error(f"Failed to extract GTFS feed downloaded from {feed_url}: {e}")
        shutil.rmtree(temp_dir, ignore_errors=True)
        raise
    return temp_dir


def download_feed_from_url(feed_url: str, cache_dir: Optional[str] = None,
                           force_download: bool = False) -> str:
    """
    Download a zipped GTFS feed and extract it.

    Args:
        feed_url: URL of the zipped feed
        cache_dir: Directory keeping the last extracted feed together with
            its ETag / Last-Modified. While the server reports the feed
            unchanged the cached copy is returned. Without it every call
            downloads into a temporary directory the caller must remove.
        force_download: Skip the conditional check

    Returns:
        Path to the directory holding the feed's text files.

    Raises:
        FeedDownloadError: If the server does not answer 200.
    """
    cached_feed = os.path.join(cache_dir, config.FEED_CACHE_DIRNAME) if cache_dir else None

    if not force_download and cached_feed and os.path.isdir(cached_feed):
        is_modified, _, _ = _check_if_modified(feed_url, cache_dir)
        if not is_modified:
            logger.info(f"Feed has not been modified, using cached copy in {cached_feed}")
            return _find_feed_root(cached_feed)

    response = requests.get(feed_url, timeout=REQUEST_TIMEOUT)
    if response.status_code != 200:
        raise FeedDownloadError(feed_url, response.status_code)

    extract_dir = _extract_feed(feed_url, response.content)

    if cached_feed:
        if os.path.exists(cached_feed):
            shutil.rmtree(cached_feed)
        os.makedirs(cache_dir, exist_ok=True)
        shutil.move(extract_dir, cached_feed)
        extract_dir = cached_feed

        # a feed served without validators is downloaded again next time
        _save_metadata(cache_dir, response.headers.get('ETag'), response.headers.get('Last-Modified'))

    feed_dir = _find_feed_root(extract_dir)
    logger.info(f"GTFS feed downloaded from {feed_url} and extracted to {feed_dir}")
    return feed_dir
