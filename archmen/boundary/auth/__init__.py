"""Auth provider boundary: token verification against Supabase."""

from archmen.boundary.auth.supabase_auth_client import AuthenticatedUser, SupabaseAuthClient

__all__ = ["AuthenticatedUser", "SupabaseAuthClient"]
