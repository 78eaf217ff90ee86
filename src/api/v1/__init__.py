"""
API v1 package.

Contains the routes of the applicant registration API.
"""

from src.api.v1.routes import router

__all__ = ["router"]
