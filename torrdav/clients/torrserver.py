"""
TorrServer client implementation
"""

import requests

from torrdav.clients.base_client import BaseBackendClient
from torrdav.torrent import TorrentParser

# Upstream headers the proxy cares about
STREAM_HEADERS = ('Content-Type', 'Content-Length', 'Content-Range', 'Accept-Ranges')


class BackendStream:
    """An open play response from the backend"""

    def __init__(self, response, chunk_size):
        self._response = response
        self.chunk_size = chunk_size
        self.status_code = response.status_code
        self.headers = {
            name: response.headers[name]
            for name in STREAM_HEADERS
            if response.headers.get(name)
        }

    def iter_content(self):
        """Yield body chunks as they arrive"""
        return self._response.iter_content(chunk_size=self.chunk_size)

    def close(self):
        self._response.close()


class TorrServerClient(BaseBackendClient):
    """TorrServer HTTP API client"""

    def __init__(self, config, logger):
        super().__init__(config, logger)
        self.session = requests.Session()
        self.session.max_redirects = 5
        self.base_url = self.config.url.rstrip('/')
        self.parser = TorrentParser(logger)

    def _torrents_action(self, payload):
        """POST an action to the /torrents endpoint and decode the JSON reply"""
        url = f"{self.base_url}/torrents"
        self.logger.debug(f"POST {url} {payload}")

        response = self.session.post(url, json=payload, timeout=self.config.timeout)
        response.raise_for_status()
        return response.json()

    def list_torrents(self):
        """List torrents, degrading to an empty list when the backend fails"""
        try:
            data = self._torrents_action({'action': 'list'})
        except (requests.exceptions.RequestException, ValueError) as e:
            self.logger.error(f"Error fetching torrents from TorrServer: {str(e)}")
            return []

        if not isinstance(data, list):
            if data is not None:
                self.logger.error(f"Unexpected torrent list from TorrServer: {type(data).__name__}")
            return []

        torrents = []
        for item in data:
            torrent = self.parser.parse_torrent(item)
            if torrent is not None:
                torrents.append(torrent)

        self.logger.debug(f"Retrieved {len(torrents)} torrents from TorrServer")
        return torrents

    def get_torrent_detail(self, torrent_hash):
        """Fetch a single torrent's status record"""
        try:
            data = self._torrents_action({'action': 'get', 'hash': torrent_hash})
        except (requests.exceptions.RequestException, ValueError) as e:
            self.logger.error(f"Error fetching torrent status for {torrent_hash}: {str(e)}")
            return None

        return self.parser.parse_torrent(data)

    def open_stream(self, torrent_hash, file_id, range_header=None, user_agent=None):
        """Open the play endpoint for a file; transport errors propagate"""
        url = f"{self.base_url}/play/{torrent_hash}/{file_id}"

        headers = {'Accept-Encoding': 'identity'}
        if range_header:
            headers['Range'] = range_header
        if user_agent:
            headers['User-Agent'] = user_agent

        self.logger.info(f"Streaming: {url} (Range: {range_header or 'none'})")

        # Only bound the connect phase, torrents may pause between pieces
        response = self.session.get(
            url,
            headers=headers,
            stream=True,
            timeout=(self.config.timeout, None)
        )
        return BackendStream(response, self.config.chunk_size)

    def echo(self):
        """Return TorrServer's version string"""
        response = self.session.get(f"{self.base_url}/echo", timeout=self.config.timeout)
        response.raise_for_status()
        return response.text
