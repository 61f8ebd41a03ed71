"""
Touchpad Relay - drive the host mouse pointer from a handheld touchpad.

The host runs a Flask + Flask-SocketIO server; the handheld client streams
gesture deltas, clicks, scrolls and drags over a single Socket.IO connection.
"""

__version__ = "1.0.0"
