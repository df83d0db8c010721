"""
Flask application factory for the WebDAV bridge
"""

import hmac
import logging
from functools import wraps

from flask import Flask, jsonify, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from torrdav.clients.torrserver import TorrServerClient
from torrdav.webdav_handler import WebDAVHandler, text_response

WEBDAV_METHODS = [
    'OPTIONS', 'GET', 'HEAD', 'PROPFIND', 'PROPPATCH',
    'MKCOL', 'PUT', 'DELETE', 'COPY', 'MOVE', 'LOCK', 'UNLOCK'
]

AUTH_REALM = 'Basic realm="TorrServer WebDAV"'


def create_app(config, logger=None, client=None):
    """
    Create the WebDAV Flask application

    Args:
        config: Application configuration
        logger: Logger instance, defaults to the 'torrdav' logger
        client: Backend client, defaults to a TorrServerClient for config.backend

    Returns:
        Flask app instance
    """
    app = Flask(__name__)
    CORS(app, expose_headers=['Content-Length', 'Content-Range', 'Accept-Ranges'])

    logger = logger or logging.getLogger('torrdav')
    client = client or TorrServerClient(config.backend, logger)
    handler = WebDAVHandler(config, logger, client)

    # Store references
    app.config['APP_CONFIG'] = config
    app.config['APP_LOGGER'] = logger
    app.config['BACKEND_CLIENT'] = client

    limiter = Limiter(
        app=app,
        key_func=get_remote_address,
        storage_uri="memory://"
    )

    # Authentication decorator
    def require_auth(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if config.auth.enabled:
                auth = request.authorization
                if auth is None or (auth.type or '').lower() != 'basic':
                    return _unauthorized('Authentication required')
                if not (_matches(auth.username, config.auth.username) and
                        _matches(auth.password, config.auth.password)):
                    logger.warning(f"Rejected credentials for user '{auth.username}' from {request.remote_addr}")
                    return _unauthorized('Invalid credentials')
            return f(*args, **kwargs)
        return decorated_function

    def rate_limited(f):
        if config.security.propfind_rate_limit:
            return limiter.limit(config.security.propfind_rate_limit, methods=['PROPFIND'])(f)
        return f

    @app.route('/health', methods=['GET'])
    def health_check():
        """
        Health check endpoint
        """
        try:
            version = client.echo()
        except Exception as e:
            logger.warning(f"Health check failed: {str(e)}")
            return jsonify({
                "status": "error",
                "message": "Cannot connect to TorrServer",
                "torrserver_url": config.backend.url
            }), 503

        return jsonify({
            "status": "ok",
            "torrserver": version,
            "webdav_bridge": "running",
            "auth_enabled": config.auth.enabled
        }), 200

    @app.route('/', defaults={'path': ''}, methods=WEBDAV_METHODS)
    @app.route('/<path:path>', methods=WEBDAV_METHODS)
    @require_auth
    @rate_limited
    def webdav(path):
        """
        WebDAV endpoint for every path below the root
        """
        return handler.dispatch(request)

    @app.errorhandler(405)
    def method_not_allowed(e):
        return text_response('Method not allowed', 405)

    @app.after_request
    def add_dav_headers(response):
        response.headers['DAV'] = '1, 2'
        response.headers['MS-Author-Via'] = 'DAV'
        return response

    return app


def _matches(given, expected):
    return hmac.compare_digest((given or '').encode('utf-8'), (expected or '').encode('utf-8'))


def _unauthorized(message):
    response = text_response(message, 401)
    response.headers['WWW-Authenticate'] = AUTH_REALM
    return response
