"""
Configuration management for the application
"""

import os
import yaml
from dataclasses import dataclass


@dataclass
class BackendConfig:
    url: str
    timeout: int
    chunk_size: int


@dataclass
class ServerConfig:
    host: str
    port: int
    debug: bool


@dataclass
class AuthConfig:
    username: str = None
    password: str = None

    @property
    def enabled(self):
        """Basic auth is only enforced when both credentials are set"""
        return bool(self.username and self.password)


@dataclass
class WebDAVConfig:
    root_name: str
    lock_timeout: int


@dataclass
class SecurityConfig:
    propfind_rate_limit: str


@dataclass
class LoggingConfig:
    level: str
    file: str
    max_bytes: int
    backup_count: int
    console: bool


class Config:
    """Main configuration class"""

    def __init__(self, config_file=None):
        self.config_file = config_file or os.getenv('CONFIG_FILE', '/config/config.yaml')

        self.backend = None
        self.server = None
        self.auth = None
        self.webdav = None
        self.security = None
        self.logging = None

        # Load configuration
        self._load_config()

    def _load_config(self):
        """Load configuration from file or environment variables"""

        # Try to load from config file first
        if os.path.exists(self.config_file):
            with open(self.config_file, 'r') as f:
                config_data = yaml.safe_load(f) or {}
        else:
            # Use environment variables
            config_data = self._load_from_env()

        backend = config_data.get('backend') or {}
        server = config_data.get('server') or {}
        auth = config_data.get('auth') or {}
        webdav = config_data.get('webdav') or {}
        security = config_data.get('security') or {}
        logging_ = config_data.get('logging') or {}

        self.backend = BackendConfig(
            url=str(backend.get('url', os.getenv('TORRSERVER_URL', 'http://localhost:8090'))).rstrip('/'),
            timeout=int(backend.get('timeout', os.getenv('TORRSERVER_TIMEOUT', 10))),
            chunk_size=int(backend.get('chunk_size', os.getenv('STREAM_CHUNK_SIZE', 65536)))
        )

        self.server = ServerConfig(
            host=server.get('host', os.getenv('HOST', '0.0.0.0')),
            port=int(server.get('port', os.getenv('PORT', 8080))),
            debug=server.get('debug', os.getenv('DEBUG', 'false').lower() == 'true')
        )

        self.auth = AuthConfig(
            username=auth.get('username', os.getenv('WEBDAV_USERNAME', '')),
            password=auth.get('password', os.getenv('WEBDAV_PASSWORD', ''))
        )

        self.webdav = WebDAVConfig(
            root_name=webdav.get('root_name', os.getenv('WEBDAV_ROOT_NAME', 'TorrServer')),
            lock_timeout=int(webdav.get('lock_timeout', os.getenv('WEBDAV_LOCK_TIMEOUT', 3600)))
        )

        # An empty limit string disables PROPFIND rate limiting
        self.security = SecurityConfig(
            propfind_rate_limit=security.get('propfind_rate_limit',
                                             os.getenv('PROPFIND_RATE_LIMIT', '600 per minute'))
        )

        self.logging = LoggingConfig(
            level=logging_.get('level', os.getenv('LOG_LEVEL', 'INFO')),
            file=logging_.get('file', os.getenv('LOG_FILE', 'logs/torrdav.log')),
            max_bytes=logging_.get('max_bytes', 10485760),
            backup_count=logging_.get('backup_count', 5),
            console=logging_.get('console', True)
        )

    def _load_from_env(self):
        """Create config structure from environment variables"""
        return {
            'backend': {},
            'server': {},
            'auth': {},
            'webdav': {},
            'security': {},
            'logging': {}
        }
