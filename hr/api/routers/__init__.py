"""
API routers for the HR service.
"""

from . import hr_management, user_management

__all__ = ["hr_management", "user_management"]
