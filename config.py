"""
Configuration settings for the JSON to TOON converter.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

# Pick up overrides from a local .env file, if any
load_dotenv()

# Base directory
BASE_DIR = Path(__file__).parent

# Output directory for .toon files written by the CLI
OUTPUT_DIR = Path(os.getenv("TOON_OUTPUT_DIR", str(BASE_DIR / "output")))

# Output file extension
TOON_EXTENSION = ".toon"

# Logging
LOG_LEVEL = os.getenv("TOON_LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("TOON_LOG_FILE", "")  # empty: log to stderr only
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Rough token estimate (1 token ~= 4 chars)
CHARS_PER_TOKEN = 4

# Rate limiting for URL sources
REQUESTS_PER_SECOND = int(os.getenv("TOON_REQUESTS_PER_SECOND", "2"))
MAX_RETRIES = int(os.getenv("TOON_MAX_RETRIES", "3"))
CONNECT_TIMEOUT = 10  # seconds for connection establishment
READ_TIMEOUT = 30  # seconds for reading response
USER_AGENT = "TOON-Converter/1.0"

# Source name that selects the built-in sample document
SAMPLE_SOURCE = "sample:"

# Demo document shown when no input is given
SAMPLE_JSON = [
    {"id": 1, "name": "Alice Johnson", "role": "admin", "active": True, "tags": ["dev", "lead"]},
    {"id": 2, "name": "Bob Smith", "role": "user", "active": True, "tags": ["design"]},
    {"id": 3, "name": "Charlie Brown", "role": "user", "active": False, "tags": ["marketing"]},
    {"id": 4, "name": "Diana Ross", "role": "moderator", "active": True, "tags": ["support"]},
]
