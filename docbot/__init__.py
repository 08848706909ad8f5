"""
docbot - Rust documentation pager for Telegram
"""

__version__ = "0.1.0"
__logo__ = "📚"
