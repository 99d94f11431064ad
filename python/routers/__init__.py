"""
API routers.

- galleries/ - Admin gallery operations
- sources.py - Google Drive sources
- share.py - Anonymous client access by share token
- sync.py - Drive sync endpoint
"""
