"""
WebDAV method dispatcher
"""

import uuid

from flask import Response

from torrdav.multistatus import MultistatusBuilder
from torrdav.resolver import NodeKind, PathResolver, split_path
from torrdav.streaming import StreamingProxy

MULTISTATUS_TYPE = 'application/xml; charset=utf-8'

ALLOWED_METHODS = 'OPTIONS, GET, HEAD, PROPFIND, PROPPATCH, MKCOL, COPY, MOVE, DELETE, LOCK, UNLOCK'
CORS_METHODS = 'OPTIONS, GET, HEAD, PROPFIND, PROPPATCH'
CORS_HEADERS = ('Content-Type, Depth, User-Agent, X-Requested-With, If-Modified-Since, '
                'Cache-Control, Range, Authorization')

READ_ONLY_METHODS = ('MKCOL', 'PUT', 'DELETE', 'COPY', 'MOVE')


def text_response(body, status):
    return Response(body, status=status, content_type='text/plain; charset=utf-8')


class WebDAVHandler:
    """Handles WebDAV requests against the backend"""

    def __init__(self, config, logger, client):
        self.config = config
        self.logger = logger
        self.client = client
        self.resolver = PathResolver(client, logger)
        self.builder = MultistatusBuilder(config.webdav)
        self.proxy = StreamingProxy(client, logger)

    def dispatch(self, request):
        """
        Route a request to the handler for its method

        Args:
            request: Flask request

        Returns:
            Response
        """
        method = request.method.upper()

        if method == 'PROPFIND':
            return self.handle_propfind(request)
        if method in ('GET', 'HEAD'):
            return self.handle_get_head(request)
        if method == 'OPTIONS':
            return self.handle_options()
        if method == 'PROPPATCH':
            return self.handle_proppatch(request)
        if method == 'LOCK':
            return self.handle_lock()
        if method == 'UNLOCK':
            return self.handle_unlock()
        if method in READ_ONLY_METHODS:
            self.logger.debug(f"Rejected {method} {request.path}: read-only")
            return text_response('Read-only WebDAV server', 405)

        return text_response('Method not allowed', 405)

    def handle_propfind(self, request):
        """List the root, a torrent folder or a single file"""
        path = request.path
        depth = request.headers.get('Depth', '0')

        self.logger.info(f"PROPFIND {path} (Depth: {depth}, "
                         f"User-Agent: {request.headers.get('User-Agent', 'unknown')})")

        try:
            resolution = self.resolver.resolve(path)

            if resolution.kind == NodeKind.ROOT:
                torrents = self.resolver.list_root() if depth != '0' else []
                body = self.builder.build_root(torrents, depth)
            elif resolution.kind == NodeKind.TORRENT:
                body = self.builder.build_torrent(resolution.torrent, depth)
            elif resolution.kind == NodeKind.FILE:
                body = self.builder.build_file(resolution.torrent, resolution.file)
            else:
                return text_response(resolution.message or 'Not found', 404)

        except Exception as e:
            self.logger.error(f"PROPFIND error for {path}: {str(e)}", exc_info=True)
            return text_response('Internal server error', 500)

        return Response(body, status=207, content_type=MULTISTATUS_TYPE)

    def handle_get_head(self, request):
        """Describe (HEAD) or stream (GET) a file"""
        path = request.path

        # Only files can be read, collections have nothing to stream
        if len(split_path(path)) < 2:
            return text_response('Not found', 404)

        resolution = self.resolver.resolve(path)
        if resolution.kind != NodeKind.FILE:
            self.logger.info(f"{request.method} {path}: {resolution.message}")
            return text_response(resolution.message or 'Not found', 404)

        if request.method.upper() == 'HEAD':
            return self.proxy.head(resolution.torrent, resolution.file)

        try:
            return self.proxy.get(
                resolution.torrent,
                resolution.file,
                range_header=request.headers.get('Range'),
                user_agent=request.headers.get('User-Agent')
            )
        except Exception as e:
            self.logger.error(f"Stream error for {path}: {str(e)}")
            return text_response('Stream error', 500)

    def handle_options(self):
        """Advertise capabilities"""
        response = Response(status=200)
        response.headers['Allow'] = ALLOWED_METHODS
        response.headers['Access-Control-Allow-Origin'] = '*'
        response.headers['Access-Control-Allow-Methods'] = CORS_METHODS
        response.headers['Access-Control-Allow-Headers'] = CORS_HEADERS
        response.headers['Content-Length'] = '0'
        return response

    def handle_proppatch(self, request):
        """Pretend to store properties"""
        return Response(self.builder.build_proppatch(request.path), status=207,
                        content_type=MULTISTATUS_TYPE)

    def handle_lock(self):
        """Hand out a lock token that is never checked"""
        lock_token = f"opaquelocktoken:{uuid.uuid4()}"
        response = Response(self.builder.build_lock(lock_token), status=200,
                            content_type=MULTISTATUS_TYPE)
        response.headers['Lock-Token'] = f"<{lock_token}>"
        return response

    def handle_unlock(self):
        return Response(status=204)
