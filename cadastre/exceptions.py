"""
Errors raised by the cadastre collector
"""


class CadastreError(RuntimeError):
    """Base class for cadastre collector errors"""


class VWorldTransportError(CadastreError):
    """Network failure, HTTP error status, timeout or undecodable response body"""


class ProjectStoreError(CadastreError):
    """Project state could not be saved or loaded"""


class StoreQuotaExceededError(ProjectStoreError):
    """Serialized project state is larger than the quick store allows"""

    def __init__(self, size_bytes: int, limit_bytes: int):
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        super().__init__(
            f"Project state is {size_bytes} bytes, quick store limit is {limit_bytes} bytes. "
            f"Export the project to a file instead."
        )
