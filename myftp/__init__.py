"""A small FTP server serving one directory to the Anonymous user."""

__version__ = "0.1.0"