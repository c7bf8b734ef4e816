import logging
import os

from app import DEFAULT_HOST, DEFAULT_PORT, app
from technews import SETTINGS

logger = logging.getLogger("technews")

if __name__ == '__main__':
    host = os.getenv('HOST', DEFAULT_HOST)
    port = int(os.getenv('PORT', DEFAULT_PORT))
    debug = os.getenv('DEBUG', 'False').lower() == 'true'

    logger.info("Starting Tech News API on %s:%s", host, port)
    logger.info("Default feed: %s (%d allowed sources)", SETTINGS.feed_url, len(SETTINGS.allowed_urls))

    app.run(host=host, port=port, debug=debug, threaded=True)
