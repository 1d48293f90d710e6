"""TrustCheck TUI - Terminal form for website trust checks.

Type a host, press Enter, and read the trust report returned by the
remote service. Built with Textual + Rich.
"""

from .app import TrustCheckApp, run

__version__ = "0.1.0"
__all__ = ["TrustCheckApp", "run"]
