# =============================================================================
# core/repositories/ - Storage Backends
# =============================================================================
# - base.py: Repository contract and the per-table bundle
# - supabase.py: Postgres via Supabase (production)
# - memory.py: in-process dicts (tests, local development)
#
# build_repositories() picks one from settings.STORAGE_BACKEND.
# =============================================================================

from core.repositories.base import Repositories, Repository
from core.repositories.memory import InMemoryRepositories, InMemoryRepository


def build_repositories(backend: str) -> Repositories:
    """Create the repository bundle for a storage backend name."""
    if backend == "memory":
        return InMemoryRepositories()
    if backend == "supabase":
        # Imported lazily so the memory backend works without Supabase settings
        from core.repositories.supabase import SupabaseRepositories
        return SupabaseRepositories()
    raise ValueError(f"Unknown storage backend: {backend}")


__all__ = [
    "Repository",
    "Repositories",
    "InMemoryRepository",
    "InMemoryRepositories",
    "build_repositories",
]
