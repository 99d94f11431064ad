"""
Infrastructure package - external dependencies and integrations.

Modules:
- supabase.py - Unified Supabase client
- google_drive.py - Google Drive folder listing client
"""

from infrastructure.supabase import SupabaseClient, get_supabase_client
from infrastructure.google_drive import GoogleDriveClient

__all__ = [
    'SupabaseClient',
    'get_supabase_client',
    'GoogleDriveClient',
]
