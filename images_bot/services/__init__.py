"""External services package.

Contains the photo downloader for the Telegram file API and the ZIP archive
builder used to package a collection.
"""
