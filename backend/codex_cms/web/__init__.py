from .site import site_bp
from .admin import admin_bp

__all__ = ["site_bp", "admin_bp"]
