"""Supabase Provider Package"""

from infrastructure.adapters.output.providers.supabase.supabase_lead_repository import SupabaseLeadRepository

__all__ = ['SupabaseLeadRepository']
