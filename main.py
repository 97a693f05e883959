import os
import logging
from flask import Flask, jsonify
import functions_framework
import requests

# ----------------------
# Configuration
# ----------------------
API_KEY_ENV = "GOOGLE_FONTS_API_KEY"
GOOGLE_FONTS_API_URL = "https://www.googleapis.com/webfonts/v1/webfonts"
FONT_SORT_ORDER = "trending"
MAX_DETAILS_LENGTH = 100
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", "8080"))
UPSTREAM_TIMEOUT = float(os.getenv("UPSTREAM_TIMEOUT")) if os.getenv("UPSTREAM_TIMEOUT") else None

# Logging
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger("font-proxy")

# ----------------------
# App Setup
# ----------------------
app = Flask(__name__)

# ----------------------
# Errors
# ----------------------
class FontProxyError(Exception):
    """Base error; carries the status and public body sent to the caller."""

    status_code = 500
    message = "Internal server error during font fetch."

    def to_dict(self):
        return {"error": self.message}


class ConfigurationError(FontProxyError):
    message = "Server configuration error: API key missing."


class UpstreamHTTPError(FontProxyError):
    message = "Failed to fetch fonts from Google API."

    def __init__(self, status_code: int, details: str):
        super().__init__(f"Google API responded with status {status_code}")
        self.status_code = status_code
        self.details = details

    def to_dict(self):
        # "..." is appended even when nothing was cut off
        return {
            "error": self.message,
            "details": self.details[:MAX_DETAILS_LENGTH] + "...",
        }


class TransportError(FontProxyError):
    pass

# ----------------------
# Helpers
# ----------------------
def redact(text: str, secret: str) -> str:
    """Replace every occurrence of the secret with ***."""
    if not text or not secret:
        return text or ""
    return text.replace(secret, "***")

def fetch_font_list(api_key: str):
    """Fetch the trending font catalog from Google Fonts.

    Returns the decoded JSON payload untouched. Raises UpstreamHTTPError for
    a non-2xx answer and TransportError when the call fails or the body is
    not JSON.
    """
    try:
        resp = requests.get(
            GOOGLE_FONTS_API_URL,
            params={"key": api_key, "sort": FONT_SORT_ORDER},
            timeout=UPSTREAM_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.error("Google API request failed: %s", redact(str(e), api_key))
        raise TransportError(type(e).__name__) from e

    if not 200 <= resp.status_code < 300:
        error_text = redact(resp.text, api_key)
        logger.error("Google API responded with status %s: %s", resp.status_code, error_text)
        raise UpstreamHTTPError(resp.status_code, error_text)

    try:
        return resp.json()
    except ValueError as e:
        logger.error("Google API returned a non-JSON body: %s", redact(str(e), api_key))
        raise TransportError("invalid JSON") from e

def error_response(err: FontProxyError):
    return jsonify(err.to_dict()), err.status_code

def handle_font_request():
    """Proxy one font list request; always returns a JSON response."""
    api_key = os.getenv(API_KEY_ENV)
    if not api_key:
        logger.error("%s is not set in the environment", API_KEY_ENV)
        return error_response(ConfigurationError())

    try:
        data = fetch_font_list(api_key)
    except FontProxyError as e:
        return error_response(e)
    except Exception as e:
        logger.error("Function execution error: %s: %s", type(e).__name__, redact(str(e), api_key))
        return error_response(TransportError())

    logger.debug("Forwarding font list from Google API")
    return jsonify(data), 200, {"Content-Type": "application/json"}

# ----------------------
# Endpoints
# ----------------------
@functions_framework.http
def get_fonts(request):
    """Cloud Functions entry point."""
    return handle_font_request()

@app.route("/", methods=["GET"])
def health_check():
    return jsonify({"status": "proxy-running"}), 200

@app.route("/get-fonts", methods=["GET", "POST"])
def font_proxy():
    return handle_font_request()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=PORT)
