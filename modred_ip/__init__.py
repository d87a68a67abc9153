"""
ModredIP client for Hedera

- ContractService: typed calls against the ModredIP registry contract
- story_service / license_service: backend write helpers
- server: FastAPI app exposing license minting and read-only views
"""

__version__ = "0.1.0"
