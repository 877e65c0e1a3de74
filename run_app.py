#!/usr/bin/env python3
"""
Application runner for Viral Studio.

Starts the Flask API with the configuration selected by FLASK_ENV.
"""

import os

from viral_studio.api.app import run_app


if __name__ == '__main__':
    run_app(
        host=os.environ.get('HOST', '0.0.0.0'),
        port=int(os.environ.get('PORT', 5001)),
        debug=os.environ.get('DEBUG', 'false').lower() == 'true'
    )
