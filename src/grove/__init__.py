"""Remote branch statistics and cleanup tool.

Features:
- Count remote branches per author email
- List the remote branches authored by an email
- Interactively delete remote branches authored by an email
"""

__version__ = "0.1.0"
