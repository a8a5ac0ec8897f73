"""FastAPI REST API for sheet nesting.

This module provides a REST API for optimizing cut lists and validating job
files.

Usage:
    uvicorn sheetnest.web:app --reload
"""

from sheetnest.web.app import app, create_app

__all__ = ["app", "create_app"]
