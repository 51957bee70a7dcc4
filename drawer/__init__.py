# Drawer Search Package
"""
Search core for a launcher app drawer.

Modules:
  - search.matching: Tiered ranking of installed items
  - search.registry: Prefix -> provider index
  - search.router: Prefix activation and residual queries
  - search.session: Keystroke-level orchestration
  - services.recents: Frecency-ranked recent items
"""

__version__ = "0.1.0"
