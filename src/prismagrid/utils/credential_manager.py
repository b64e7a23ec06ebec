"""
Credential Manager - Secure storage for the generation API key using system keyring
"""

import logging

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

logger = logging.getLogger(__name__)


class CredentialManager:
    """
    Manages the generation API key in the system's credential manager.

    - Windows: Windows Credential Manager (DPAPI encryption)
    - macOS: Keychain
    - Linux: Secret Service (freedesktop.org)
    """

    SERVICE_NAME = "prismagrid"
    API_KEY_ENTRY = "generation:api_key"

    @staticmethod
    def save_api_key(api_key: str) -> bool:
        """
        Save the API key securely.

        Args:
            api_key: Generation API key

        Returns:
            True if saved successfully, False otherwise
        """
        try:
            keyring.set_password(
                CredentialManager.SERVICE_NAME,
                CredentialManager.API_KEY_ENTRY,
                api_key
            )
            logger.info("API key saved securely")
            return True
        except KeyringError as e:
            logger.error(f"Failed to save API key: {e}")
            return False

    @staticmethod
    def get_api_key() -> str:
        """
        Retrieve the API key.

        Returns:
            The stored key, or "" if not found or the keyring is unavailable
        """
        try:
            api_key = keyring.get_password(
                CredentialManager.SERVICE_NAME,
                CredentialManager.API_KEY_ENTRY
            )
            return api_key or ""
        except KeyringError as e:
            logger.error(f"Failed to retrieve API key: {e}")
            return ""

    @staticmethod
    def delete_api_key() -> bool:
        """
        Delete the stored API key.

        Returns:
            True if deleted (or already absent), False on keyring failure
        """
        try:
            keyring.delete_password(
                CredentialManager.SERVICE_NAME,
                CredentialManager.API_KEY_ENTRY
            )
            logger.info("API key deleted")
            return True
        except PasswordDeleteError:
            return True  # Already deleted or doesn't exist
        except KeyringError as e:
            logger.error(f"Failed to delete API key: {e}")
            return False

    @staticmethod
    def has_api_key() -> bool:
        """Check if an API key is stored."""
        return bool(CredentialManager.get_api_key())
