"""
Map WebDAV request paths onto backend torrents and files
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from torrdav.torrent import FileEntry, Torrent


class NodeKind(Enum):
    ROOT = "root"
    TORRENT = "torrent"
    FILE = "file"
    NOT_FOUND = "not_found"


@dataclass
class Resolution:
    kind: NodeKind
    torrent: Optional[Torrent] = None
    file: Optional[FileEntry] = None
    message: str = ''

    @property
    def found(self):
        return self.kind != NodeKind.NOT_FOUND


def split_path(path: str) -> List[str]:
    """Split a decoded path into its non-empty segments"""
    return [part for part in path.split('/') if part]


def find_torrent(torrents, name: str) -> Optional[Torrent]:
    """First torrent, in backend order, whose display name equals name"""
    for torrent in torrents:
        if torrent.display_name == name:
            return torrent
    return None


def find_file(torrent: Torrent, requested: str) -> Optional[FileEntry]:
    """
    Locate a file by its full backend path, falling back to its flattened name

    An exact path match anywhere in the list wins over a flattened-name match.
    Among flattened-name ties the first entry in backend order is returned.
    """
    for file_entry in torrent.files:
        if file_entry.path == requested:
            return file_entry
    for file_entry in torrent.files:
        if file_entry.display_name == requested:
            return file_entry
    return None


class PathResolver:
    """Resolve paths against a fresh backend listing on every call"""

    def __init__(self, client, logger):
        self.client = client
        self.logger = logger

    def resolve(self, path: str) -> Resolution:
        """
        Resolve a URL-decoded request path

        Args:
            path: Request path, e.g. "/Movie/movie.mkv"

        Returns:
            Resolution: ROOT, TORRENT, FILE or NOT_FOUND with a message
        """
        parts = split_path(path)

        if not parts:
            return Resolution(NodeKind.ROOT)

        torrents = self.client.list_torrents()
        torrent = find_torrent(torrents, parts[0])
        if torrent is None:
            self.logger.debug(f"Torrent not found: {parts[0]}")
            return Resolution(NodeKind.NOT_FOUND, message='Torrent not found')

        if len(parts) == 1:
            return Resolution(NodeKind.TORRENT, torrent=torrent)

        requested = '/'.join(parts[1:])
        file_entry = find_file(torrent, requested)
        if file_entry is None:
            self.logger.debug(f"File not found in {torrent.display_name}: {requested}")
            return Resolution(NodeKind.NOT_FOUND, torrent=torrent, message='File not found')

        return Resolution(NodeKind.FILE, torrent=torrent, file=file_entry)

    def list_root(self):
        """Torrents shown at the root, fetched fresh"""
        return self.client.list_torrents()
