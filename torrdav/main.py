"""
Main entry point for the WebDAV bridge
"""

from torrdav.app import create_app
from torrdav.config import Config
from torrdav.utils.logger import setup_logger

# Load configuration
config = Config()

# Setup logging
logger = setup_logger(config)

# WSGI target, e.g. gunicorn torrdav.main:app
app = create_app(config, logger)


def run():
    """Start the development server"""
    logger.info(f"WebDAV server: http://{config.server.host}:{config.server.port}")
    logger.info(f"TorrServer:    {config.backend.url}")
    logger.info(f"Auth:          {'Enabled (Basic Auth)' if config.auth.enabled else 'Disabled'}")
    logger.warning("Running in development mode. Use gunicorn for production.")

    app.run(
        host=config.server.host,
        port=config.server.port,
        debug=config.server.debug,
        threaded=True
    )


if __name__ == '__main__':
    run()
