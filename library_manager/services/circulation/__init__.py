from library_manager.services.circulation.circulation_service import CirculationService

__all__ = [
    'CirculationService',
]
