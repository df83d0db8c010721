"""
Abstract base class for streaming backends
"""

from abc import ABC, abstractmethod


class BaseBackendClient(ABC):
    """Abstract base class for backend implementations"""

    def __init__(self, config, logger):
        self.config = config
        self.logger = logger

    @abstractmethod
    def list_torrents(self):
        """
        Get every torrent known to the backend

        Returns:
            list: Torrent values, empty on any failure
        """
        pass

    @abstractmethod
    def get_torrent_detail(self, torrent_hash):
        """
        Get the backend's status record for a single torrent

        Args:
            torrent_hash: Torrent info hash

        Returns:
            Torrent or None if unavailable
        """
        pass

    @abstractmethod
    def open_stream(self, torrent_hash, file_id, range_header=None, user_agent=None):
        """
        Open a live byte stream for one file of a torrent

        Args:
            torrent_hash: Torrent info hash
            file_id: Backend file identifier
            range_header: Inbound Range header to forward, if any
            user_agent: Inbound User-Agent header to forward, if any

        Returns:
            BackendStream: Upstream status, headers and body; the caller
                must close it
        """
        pass

    @abstractmethod
    def echo(self):
        """
        Ping the backend

        Returns:
            str: Backend version text
        """
        pass
