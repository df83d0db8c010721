"""
Proxy GET/HEAD onto the backend play endpoint
"""

import requests
from flask import Response

from torrdav.content_types import get_content_type

EXPOSED_HEADERS = 'Content-Length, Content-Range, Accept-Ranges'


class StreamingProxy:
    """Translate WebDAV file reads into backend play requests"""

    def __init__(self, client, logger):
        self.client = client
        self.logger = logger

    def head(self, torrent, file_entry):
        """
        Describe a file without opening a backend stream

        Args:
            torrent: Resolved torrent
            file_entry: Resolved file

        Returns:
            Response: 200 with metadata headers and no body
        """
        response = Response(status=200)
        response.headers['Content-Type'] = get_content_type(file_entry.display_name)
        response.headers['Content-Length'] = str(file_entry.length or 0)
        response.headers['Accept-Ranges'] = 'bytes'
        response.headers['ETag'] = torrent.etag(file_entry)
        response.headers['Cache-Control'] = 'no-cache'
        return response

    def get(self, torrent, file_entry, range_header=None, user_agent=None):
        """
        Stream a file from the backend, mirroring its status and range headers

        Args:
            torrent: Resolved torrent
            file_entry: Resolved file
            range_header: Inbound Range header, forwarded verbatim
            user_agent: Inbound User-Agent header, forwarded verbatim

        Returns:
            Response: Upstream status with the body relayed chunk by chunk

        Raises:
            requests.exceptions.RequestException: Backend could not be reached
        """
        upstream = self.client.open_stream(
            torrent.hash,
            file_entry.id,
            range_header=range_header,
            user_agent=user_agent
        )

        try:
            headers = self._response_headers(torrent, file_entry, upstream.headers)
            response = Response(
                self._relay(upstream, file_entry),
                status=upstream.status_code,
                direct_passthrough=True
            )
        except Exception:
            upstream.close()
            raise

        # Werkzeug closes the response when the client finishes or disconnects
        response.call_on_close(upstream.close)
        for name, value in headers:
            response.headers[name] = value
        return response

    def _response_headers(self, torrent, file_entry, upstream_headers):
        headers = [
            ('Content-Type', upstream_headers.get('Content-Type')
             or get_content_type(file_entry.display_name)),
        ]

        if upstream_headers.get('Content-Length'):
            headers.append(('Content-Length', upstream_headers['Content-Length']))
        elif file_entry.length:
            headers.append(('Content-Length', str(file_entry.length)))

        if upstream_headers.get('Content-Range'):
            headers.append(('Content-Range', upstream_headers['Content-Range']))

        headers += [
            ('Accept-Ranges', upstream_headers.get('Accept-Ranges') or 'bytes'),
            ('Cache-Control', 'no-cache'),
            ('ETag', torrent.etag(file_entry)),
            ('Access-Control-Allow-Origin', '*'),
            ('Access-Control-Expose-Headers', EXPOSED_HEADERS),
        ]
        return headers

    def _relay(self, upstream, file_entry):
        """Yield upstream chunks; closing the generator closes the upstream"""
        sent = 0
        try:
            for chunk in upstream.iter_content():
                if chunk:
                    sent += len(chunk)
                    yield chunk
        except requests.exceptions.RequestException as e:
            # Headers are already out, the client sees a short body and retries with a Range
            self.logger.error(f"Stream of {file_entry.path} interrupted after {sent} bytes: {str(e)}")
        finally:
            upstream.close()
            self.logger.debug(f"Closed stream of {file_entry.path} after {sent} bytes")
