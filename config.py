"""
Design (config.py)
- Purpose: Centralize environment-driven settings (backend URLs, QR encoder, timeouts).
- Inputs: Process environment, optionally seeded from a .env file.
- Outputs: Module-level constants.
- Side effects: load_dotenv() at import.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Backend (record storage) endpoints
API_BASE = os.getenv("FG_API_BASE", "http://localhost/api")
PARTS_PATH = os.getenv("FG_PARTS_PATH", "parts.php")
RUNNERS_PATH = os.getenv("FG_RUNNERS_PATH", "manpower.php")
TICKETS_PATH = os.getenv("FG_TICKETS_PATH", "tickets.php")
ADD_PART_PATH = os.getenv("FG_ADD_PART_PATH", "add_part.php")

REQUEST_TIMEOUT_SECONDS = float(os.getenv("FG_REQUEST_TIMEOUT_SECONDS", "10"))

# External QR image provider; empty endpoint = no encoder available
QR_ENDPOINT = os.getenv("FG_QR_ENDPOINT", "https://api.qrserver.com/v1/create-qr-code/")
QR_SIZE = os.getenv("FG_QR_SIZE", "200x200")

SERIAL_PREFIX = os.getenv("FG_SERIAL_PREFIX", "FG")

# Where the operator UI sends label documents: "streamlit" (inline frame)
# or "browser" (new window on the station's default browser)
PRINT_SURFACE = os.getenv("FG_PRINT_SURFACE", "streamlit").lower()
