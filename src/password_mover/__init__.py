"""
Password Mover - Credential File Collection Utility

A CLI tool for gathering stray password files into one folder.

This package provides functionality to:
- Persist the source and destination paths in a small config file
- Scan a directory tree for files named password.txt or passwords.txt
- Move matched files into a destination folder
- Give every moved file a unique timestamped name
- Show progress while files are being moved
"""

# Product identity constants
PRODUCT_NAME = "Password Mover"
PRODUCT_VERSION = "1.0.0"
PRODUCT_DESCRIPTION = "Credential File Collection Utility"

__version__ = PRODUCT_VERSION
__author__ = "Password Mover Team"
