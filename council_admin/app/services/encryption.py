from abc import ABC, abstractmethod


class Encryptor(ABC):
    """Symmetric encryption for secrets kept in the settings store"""

    @abstractmethod
    def encrypt(self, plaintext: str) -> str:
        pass

    @abstractmethod
    def decrypt(self, ciphertext: str) -> str:
        """Raises ValueError when the ciphertext is malformed or tampered with"""
        pass
