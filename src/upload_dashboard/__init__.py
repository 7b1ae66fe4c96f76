"""
Upload Dashboard - select, preview and sequentially upload files to a
REST file-storage service, and list the files uploaded today.
"""

__version__ = "1.0.0"
