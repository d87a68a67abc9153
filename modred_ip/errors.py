"""Exceptions raised by the ModredIP client"""

from typing import Optional


class ModredIPError(Exception):
    pass


class ConfigError(ModredIPError, RuntimeError):
    """Missing or invalid network/account configuration"""


class ContractCallError(ModredIPError):
    """A contract simulation, transaction or receipt failed"""

    def __init__(self, function_name: str, message: str, tx_hash: Optional[str] = None):
        self.function_name = function_name
        self.tx_hash = tx_hash
        super().__init__(f"{function_name}: {message}")
