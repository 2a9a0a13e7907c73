"""
Vercel serverless function for location autocomplete suggestions.
"""

import json
import os
import sys
from http.server import BaseHTTPRequestHandler
from urllib.parse import parse_qs, urlparse

# Add parent directory to path for Vercel serverless environment
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from locations import suggest_locations


class handler(BaseHTTPRequestHandler):
    """Vercel serverless function entrypoint for /api/locations/suggest?q=..."""

    def do_GET(self):
        try:
            query = parse_qs(urlparse(self.path).query).get("q", [""])[0]
            suggestions = suggest_locations(query)

            self.send_response(200)
            self.send_header("Content-Type", "application/json; charset=utf-8")
            self.send_header("Cache-Control", "public, max-age=3600")  # Cache for 1 hour
            self.end_headers()
            self.wfile.write(json.dumps({"suggestions": suggestions}, ensure_ascii=False).encode("utf-8"))

        except Exception as e:
            error_msg = json.dumps({"error": str(e)}, ensure_ascii=False).encode("utf-8")
            self.send_response(500)
            self.send_header("Content-Type", "application/json; charset=utf-8")
            self.end_headers()
            self.wfile.write(error_msg)
