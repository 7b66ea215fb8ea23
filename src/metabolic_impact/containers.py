"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from metabolic_impact.adapters.supabase_impact_repository import (
    SupabaseImpactRepository,
)
from metabolic_impact.config import Settings
from metabolic_impact.services.history import ImpactHistoryService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    impact_history_service: ImpactHistoryService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    return AppContainer(
        settings=resolved_settings,
        impact_history_service=ImpactHistoryService(
            SupabaseImpactRepository(supabase_client)
        ),
    )
