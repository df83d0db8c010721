"""
WebDAV multistatus and lock response bodies
"""

from torrdav.content_types import get_content_type
from torrdav.utils.helpers import (
    escape_xml,
    format_http_date,
    format_iso_date,
    quote_path,
    quote_segment,
)

XML_HEADER = '<?xml version="1.0" encoding="utf-8"?>'

SUPPORTED_LOCK = [
    '<D:supportedlock>',
    '  <D:lockentry>',
    '    <D:lockscope><D:exclusive/></D:lockscope>',
    '    <D:locktype><D:write/></D:locktype>',
    '  </D:lockentry>',
    '</D:supportedlock>',
]


def torrent_href(torrent):
    return f"/{quote_segment(torrent.display_name)}/"


def file_href(torrent, file_entry):
    return f"/{quote_segment(torrent.display_name)}/{quote_segment(file_entry.display_name)}"


class MultistatusBuilder:
    """Render PROPFIND, PROPPATCH and LOCK bodies"""

    def __init__(self, config):
        self.config = config

    # ─── PROPFIND ──────────────────────────────────────────

    def build_root(self, torrents, depth='0'):
        """Root collection, plus one collection per torrent unless depth is 0"""
        responses = [self._root_response()]

        if depth != '0':
            for torrent in torrents:
                responses.append(self._torrent_response(torrent, include_length=True))

        return self._multistatus(responses)

    def build_torrent(self, torrent, depth='0'):
        """Torrent collection, plus one resource per file unless depth is 0"""
        responses = [self._torrent_response(torrent)]

        if depth != '0':
            for file_entry in torrent.files:
                responses.append(self._file_response(torrent, file_entry))

        return self._multistatus(responses)

    def build_file(self, torrent, file_entry):
        """Single file resource"""
        return self._multistatus([self._file_response(torrent, file_entry, supported_lock=True)])

    # ─── Stub bodies ───────────────────────────────────────

    def build_proppatch(self, path):
        """Success for every property without touching anything"""
        response = self._response(quote_path(path), ['<D:prop/>'], wrap_prop=False)
        return self._multistatus([response])

    def build_lock(self, lock_token):
        """Lock discovery body for a lock that is never enforced"""
        lines = [
            XML_HEADER,
            '<D:prop xmlns:D="DAV:">',
            '  <D:lockdiscovery>',
            '    <D:activelock>',
            '      <D:locktype><D:write/></D:locktype>',
            '      <D:lockscope><D:exclusive/></D:lockscope>',
            '      <D:depth>0</D:depth>',
            f'      <D:timeout>Second-{self.config.lock_timeout}</D:timeout>',
            f'      <D:locktoken><D:href>{escape_xml(lock_token)}</D:href></D:locktoken>',
            '    </D:activelock>',
            '  </D:lockdiscovery>',
            '</D:prop>',
        ]
        return '\n'.join(lines).encode('utf-8')

    # ─── Response blocks ───────────────────────────────────

    def _root_response(self):
        props = [
            '<D:resourcetype><D:collection/></D:resourcetype>',
            f'<D:getlastmodified>{format_http_date(None)}</D:getlastmodified>',
            f'<D:creationdate>{format_iso_date(None)}</D:creationdate>',
            f'<D:displayname>{escape_xml(self.config.root_name)}</D:displayname>',
        ] + SUPPORTED_LOCK
        return self._response('/', props)

    def _torrent_response(self, torrent, include_length=False):
        props = [
            '<D:resourcetype><D:collection/></D:resourcetype>',
            f'<D:getlastmodified>{format_http_date(torrent.timestamp)}</D:getlastmodified>',
            f'<D:creationdate>{format_iso_date(torrent.timestamp)}</D:creationdate>',
            f'<D:displayname>{escape_xml(torrent.display_name)}</D:displayname>',
        ]
        if include_length:
            props.append('<D:getcontentlength>0</D:getcontentlength>')
        return self._response(torrent_href(torrent), props)

    def _file_response(self, torrent, file_entry, supported_lock=False):
        name = file_entry.display_name
        props = [
            '<D:resourcetype/>',
            f'<D:getcontentlength>{file_entry.length or 0}</D:getcontentlength>',
            f'<D:getlastmodified>{format_http_date(torrent.timestamp)}</D:getlastmodified>',
            f'<D:creationdate>{format_iso_date(torrent.timestamp)}</D:creationdate>',
            f'<D:displayname>{escape_xml(name)}</D:displayname>',
            f'<D:getcontenttype>{get_content_type(name)}</D:getcontenttype>',
            f'<D:getetag>{torrent.etag(file_entry)}</D:getetag>',
        ]
        if supported_lock:
            props += SUPPORTED_LOCK
        return self._response(file_href(torrent, file_entry), props)

    @staticmethod
    def _response(href, props, wrap_prop=True):
        lines = ['  <D:response>', f'    <D:href>{href}</D:href>', '    <D:propstat>']
        indent = '        ' if wrap_prop else '      '
        if wrap_prop:
            lines.append('      <D:prop>')
        lines.extend(indent + prop for prop in props)
        if wrap_prop:
            lines.append('      </D:prop>')
        lines.append('      <D:status>HTTP/1.1 200 OK</D:status>')
        lines.append('    </D:propstat>')
        lines.append('  </D:response>')
        return '\n'.join(lines)

    @staticmethod
    def _multistatus(responses):
        lines = [XML_HEADER, '<D:multistatus xmlns:D="DAV:">']
        lines.extend(responses)
        lines.append('</D:multistatus>')
        return '\n'.join(lines).encode('utf-8')
