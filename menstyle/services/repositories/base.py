"""Base repository with shared data gateway."""

from menstyle.services.gateway import DataGateway


class BaseRepository:
    """Base class for all repositories.

    Repositories only see the ``DataGateway`` interface, never the Supabase
    client itself.
    """

    table: str = ""

    def __init__(self, gateway: DataGateway) -> None:
        self.gateway = gateway
