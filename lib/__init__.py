# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Supabase client singleton and users table helpers
# - utils.py: Identifier tags and base64 helpers
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import generate_numeric_tag, to_base64, from_base64

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Utils
    "generate_numeric_tag",
    "to_base64",
    "from_base64",
]
