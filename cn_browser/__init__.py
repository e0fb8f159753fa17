"""
Top-level package for the proteomics copy-number browser.

This package exposes the core architecture (domain, views, UI adapters).
Most code should import from submodules such as:
    cn_browser.core
    cn_browser.views
    cn_browser.ui
"""

__all__: list[str] = []
