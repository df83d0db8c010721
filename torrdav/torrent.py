"""
Torrent model and file extraction from TorrServer list entries
"""

import json
from dataclasses import dataclass, field
from typing import Optional, Tuple

from torrdav.utils.helpers import flatten_file_path


@dataclass(frozen=True)
class FileEntry:
    path: str
    length: int
    id: int

    @property
    def display_name(self):
        return flatten_file_path(self.path)


@dataclass(frozen=True)
class Torrent:
    hash: str
    title: str = ''
    name: str = ''
    timestamp: Optional[float] = None
    raw_file_payload: Optional[str] = None
    files: Tuple[FileEntry, ...] = field(default_factory=tuple)

    @property
    def display_name(self):
        """First non-empty of title, name and hash"""
        return self.title or self.name or self.hash

    def etag(self, file_entry):
        return f'"{self.hash}-{file_entry.id}"'


class TorrentParser:
    """Build Torrent values from the backend's JSON objects"""

    def __init__(self, logger):
        self.logger = logger

    def parse_torrent(self, item):
        """
        Parse one entry of the backend's torrent list

        Args:
            item: Decoded JSON object from the list or get action

        Returns:
            Torrent or None when the entry has no hash
        """
        if not isinstance(item, dict) or not item.get('hash'):
            self.logger.warning(f"Skipping torrent entry without hash: {item!r:.200}")
            return None

        title = item.get('title') or ''
        name = item.get('name') or ''
        raw_payload = item.get('data')

        return Torrent(
            hash=item['hash'],
            title=title,
            name=name,
            timestamp=item.get('timestamp') or None,
            raw_file_payload=raw_payload,
            files=self.parse_files(raw_payload, title or name or item['hash'])
        )

    def parse_files(self, raw_payload, label=''):
        """
        Extract the file list embedded in a torrent's data field

        Args:
            raw_payload: JSON string (or already decoded object) shaped like
                {"TorrServer": {"Files": [{"path", "length", "id"}, ...]}}
            label: Torrent name used in log messages

        Returns:
            tuple: FileEntry values in backend order, empty when the payload
                is missing or malformed
        """
        if not raw_payload:
            self.logger.debug(f"No file payload for {label}")
            return ()

        try:
            data = json.loads(raw_payload) if isinstance(raw_payload, (str, bytes)) else raw_payload
            files = data['TorrServer']['Files']
            if not isinstance(files, list):
                raise TypeError(f"Files is {type(files).__name__}, expected list")
        except (ValueError, KeyError, TypeError) as e:
            self.logger.warning(f"Failed to parse file payload for {label}: {str(e)}")
            return ()

        entries = []
        for file_info in files:
            if not isinstance(file_info, dict) or not file_info.get('path'):
                self.logger.debug(f"Skipping file entry without path in {label}")
                continue

            try:
                length = int(file_info.get('length') or 0)
            except (ValueError, TypeError):
                length = 0

            entries.append(FileEntry(
                path=str(file_info['path']),
                length=length,
                id=file_info.get('id')
            ))

        self.logger.debug(f"{label}: parsed {len(entries)} files from data")
        return tuple(entries)
