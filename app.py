"""Main application module for the Tech News API."""
from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

load_dotenv(os.getenv("TECHNEWS_DOTENV", ".env"))

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()],
)

logger = logging.getLogger("technews")

# Constants
DEFAULT_PORT = 5000
DEFAULT_HOST = "127.0.0.1"

# Initialize Flask app
app = Flask(__name__, template_folder='templates')
CORS(app, origins="*", send_wildcard=True, methods=["GET", "OPTIONS"], allow_headers=["Content-Type"])

# Register API routes
from api_routes import register_routes  # noqa: E402

register_routes(app)

__all__ = ["app"]
