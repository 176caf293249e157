"""User account use cases"""
from .register_user import RegisterUser
from .get_profile import GetProfile
from .update_profile import UpdateProfile
from .delete_account import DeleteAccount
from .dtos import (
    RegisterUserCommandDTO,
    UpdateProfileCommandDTO,
    UserProfileResponseDTO,
)

__all__ = [
    "RegisterUser",
    "GetProfile",
    "UpdateProfile",
    "DeleteAccount",
    "RegisterUserCommandDTO",
    "UpdateProfileCommandDTO",
    "UserProfileResponseDTO",
]
