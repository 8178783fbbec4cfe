"""
Middleware for request logging and security headers
"""
from flask import request
import logging

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    # Prevent clickjacking
    'X-Frame-Options': 'DENY',
    # Prevent MIME type sniffing
    'X-Content-Type-Options': 'nosniff',
    'Referrer-Policy': 'strict-origin-when-cross-origin',
    # JSON API: patient data must not be cached by intermediaries
    'Cache-Control': 'no-store',
}


def setup_middleware(app):
    """Register request logging and response headers"""

    @app.before_request
    def log_request():
        if not app.debug:
            logger.info("%s %s - %s", request.method, request.path, request.remote_addr)

    @app.after_request
    def set_security_headers(response):
        if not app.debug:
            for header, value in SECURITY_HEADERS.items():
                response.headers.setdefault(header, value)
            # Only add HSTS if using HTTPS
            if request.is_secure:
                response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response
