"""
appylink_shared — shared settings, models, and helpers for the Appy Link directory.

Usage:
    from appylink_shared.config import settings
    from appylink_shared.db import get_supabase_client, is_supabase_configured
    from appylink_shared.models import Provider, Category, ListingSubmission
    from appylink_shared.validation import validate_submission
    from appylink_shared.seed import SEED_PROVIDERS, SEED_CATEGORIES
"""

__version__ = "0.1.0"
