"""
Extension to MIME type lookup
"""

import os

CONTENT_TYPES = {
    # Video
    '.mp4': 'video/mp4',
    '.mkv': 'video/x-matroska',
    '.avi': 'video/x-msvideo',
    '.mov': 'video/quicktime',
    '.wmv': 'video/x-ms-wmv',
    '.flv': 'video/x-flv',
    '.webm': 'video/webm',
    '.m4v': 'video/x-m4v',
    '.ts': 'video/mp2t',
    # Audio
    '.mp3': 'audio/mpeg',
    '.flac': 'audio/flac',
    '.wav': 'audio/wav',
    '.aac': 'audio/aac',
    '.m4a': 'audio/mp4',
    '.ogg': 'audio/ogg',
    '.wma': 'audio/x-ms-wma',
    # Subtitles and text
    '.srt': 'application/x-subrip',
    '.ass': 'text/x-ssa',
    '.ssa': 'text/x-ssa',
    '.sub': 'text/x-microdvd',
    '.vtt': 'text/vtt',
    '.idx': 'application/x-idx',
    '.nfo': 'text/plain',
    '.txt': 'text/plain',
    # Images
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.png': 'image/png',
    '.gif': 'image/gif',
    '.bmp': 'image/bmp',
}

DEFAULT_CONTENT_TYPE = 'application/octet-stream'


def get_content_type(filename):
    """
    Guess the content type of a file from its extension

    Args:
        filename: Name or path of file

    Returns:
        str: MIME type, application/octet-stream when unknown
    """
    _, ext = os.path.splitext(filename)
    return CONTENT_TYPES.get(ext.lower(), DEFAULT_CONTENT_TYPE)
