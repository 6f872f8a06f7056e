"""Supabase clients shared by the ReferralHub services.

The anon client carries Supabase Auth calls (sign-up, sign-in, token lookup).
Member and admin services read through the service-role client and scope every
query by the caller's user id, since row level security is bypassed there.
"""
from supabase import create_client, Client
from referralhub.config import settings


class SupabaseClient:
    _auth_client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        """Anon-key client used for Supabase Auth"""
        if cls._auth_client is None:
            cls._auth_client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._auth_client

    @classmethod
    def get_service_client(cls) -> Client:
        """Service-role client for member data, admin routes and the pool scheduler.

        Falls back to the anon client when no service-role key is configured,
        which only suits local development against permissive policies.
        """
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()

    @classmethod
    def reset_client(cls):
        cls._auth_client = None
        cls._service_client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_service_supabase() -> Client:
    return SupabaseClient.get_service_client()
