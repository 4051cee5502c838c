"""Business logic layer for files app.

This package holds the rules of the file lifecycle:
- Upload validation and record creation
- Ownership and visibility checks
- Listing of folder children
- Selection of size variants when serving content

Logic never talks to HTTP; views call ``FileOperations``.
"""
