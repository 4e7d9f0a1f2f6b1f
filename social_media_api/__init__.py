"""
Top-level package for the Social Media API.

This file makes ``social_media_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``social_media_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
