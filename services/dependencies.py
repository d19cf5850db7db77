"""
Service wiring.

Builds a scan service from explicit parts, filling in whatever the caller
leaves out from settings.
"""
from typing import Optional

from config.settings import Settings, settings as default_settings
from gateway.base import ProcessingGateway
from gateway.factory import GatewayFactory
from stores.session import ScanSession
from .scan_service import ScanService


def get_gateway(config: Optional[Settings] = None) -> ProcessingGateway:
    """
    Gateway configured from settings.

    Returns:
        HttpProcessingGateway pointed at SCAN_BACKEND_URL
    """
    return GatewayFactory.create_gateway('http', settings=config or default_settings)


def get_scan_service(
    session: Optional[ScanSession] = None,
    gateway: Optional[ProcessingGateway] = None,
    config: Optional[Settings] = None
) -> ScanService:
    """
    Scan service over a session and gateway.

    Args:
        session: Existing session (optional, a new one is created)
        gateway: Gateway (optional, will create from settings if not provided)
        config: Settings (optional, module-level settings by default)

    Returns:
        ScanService instance
    """
    config = config or default_settings
    if session is None:
        session = ScanSession()
    if gateway is None:
        gateway = get_gateway(config)

    return ScanService(session=session, gateway=gateway, config=config)
