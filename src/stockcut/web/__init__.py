"""FastAPI REST API for cut optimization.

This module provides a REST API for optimizing cutting layouts, checking
stock sufficiency and estimating material needs.

Usage:
    uvicorn stockcut.web:app --reload
"""

from stockcut.web.app import app, create_app

__all__ = ["app", "create_app"]
