"""Telegram bot implementation package.

Contains all Telegram bot specific functionality including command and
message handlers, per-chat collection state, collection processing and
localized message templates.
"""
