"""
Helper functions
"""

import time
from datetime import datetime, timezone
from urllib.parse import quote

from werkzeug.http import http_date

# Characters encodeURIComponent leaves alone, so hrefs match what WebDAV
# clients already build for these names
_SEGMENT_SAFE = "!~*'()"


def flatten_file_path(file_path):
    """
    Reduce a backend file path to its last segment

    Args:
        file_path: Path inside the torrent, e.g. "Season 1/Episode 3.mkv"

    Returns:
        str: Display name, e.g. "Episode 3.mkv"
    """
    return file_path.split('/')[-1]


def escape_xml(text):
    """
    Escape text for use as XML element content

    Args:
        text: Raw text

    Returns:
        str: Text with & < > " ' replaced by entities
    """
    return (str(text)
            .replace('&', '&amp;')
            .replace('<', '&lt;')
            .replace('>', '&gt;')
            .replace('"', '&quot;')
            .replace("'", '&apos;'))


def quote_segment(segment):
    """Percent-encode a single path segment, '/' included"""
    return quote(segment, safe=_SEGMENT_SAFE)


def quote_path(path):
    """Percent-encode a path while keeping its '/' separators"""
    return quote(path, safe='/' + _SEGMENT_SAFE)


def resolve_timestamp(timestamp):
    """Backend timestamps of 0 or None mean "now" """
    return timestamp if timestamp else time.time()


def format_http_date(timestamp):
    """RFC 1123 date for getlastmodified"""
    return http_date(resolve_timestamp(timestamp))


def format_iso_date(timestamp):
    """ISO 8601 UTC date with milliseconds for creationdate"""
    moment = datetime.fromtimestamp(resolve_timestamp(timestamp), tz=timezone.utc)
    return moment.strftime('%Y-%m-%dT%H:%M:%S.') + f"{moment.microsecond // 1000:03d}Z"
