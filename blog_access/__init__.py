"""
django-blog-access - Permission-filtered content access for a Django blog.

Features:
- Graded post visibility (public, users, drafts, unlisted, private)
- Composable visibility predicates, executable in SQL or in memory
- Case-insensitive account uniqueness backed by unique indexes
- Author-scoped post updates and deletes
- Degrade-to-empty listing on transient database failures
"""

__version__ = "0.1.0"
__author__ = "Nestor Wheelock"
