# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for table operations
# - security.py: Password hashing and access-token signing
#
# These modules are self-contained and can be tested in isolation.
# supabase_client is imported from its module directly so the in-memory
# backend never needs the Supabase SDK configured.
# =============================================================================
