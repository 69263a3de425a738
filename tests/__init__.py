# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Car Rental API:
# - test_models.py: Unit tests for Pydantic schema validation
# - test_order_service.py: Order lifecycle rules, without HTTP
# - test_orders_api.py: Order endpoints end to end
# - test_resources_api.py: Users, customers and cars endpoints
# - test_auth.py: Login and bearer-token checks
# - test_config.py: Settings validation
# - test_supabase_repository.py: Supabase backend with a mocked client
#
# Run tests with: pytest
# =============================================================================
