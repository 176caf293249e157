"""Client management use cases"""
from .create_client import CreateClient
from .get_client import GetClient
from .list_clients import ListClients
from .update_client import UpdateClient
from .delete_client import DeleteClient
from .dtos import (
    CreateClientCommandDTO,
    UpdateClientCommandDTO,
    ClientResponseDTO,
    ListClientsResponseDTO,
)

__all__ = [
    "CreateClient",
    "GetClient",
    "ListClients",
    "UpdateClient",
    "DeleteClient",
    "CreateClientCommandDTO",
    "UpdateClientCommandDTO",
    "ClientResponseDTO",
    "ListClientsResponseDTO",
]
