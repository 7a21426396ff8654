"""Telegram Images Bot Application Package.

A Telegram bot that collects photos sent across several messages and returns
them to the user as a single ZIP archive.

The application follows a modular architecture with separate concerns for:
- Bot handlers and per-chat collection state
- Photo downloading from the Telegram file API
- Archive building and naming
"""

__version__ = "0.1.0"
