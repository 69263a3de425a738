# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the rental domain logic:
# - models/: Pydantic schemas for data validation
# - repositories/: storage backends (Supabase, in-memory)
# - services/: per-resource rules on top of the repositories
#
# Code in this package should NOT import from FastAPI routers.
# Errors are raised as the typed exceptions in app.exceptions.
# =============================================================================
