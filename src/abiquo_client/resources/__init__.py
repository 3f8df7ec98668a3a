"""Resource-specific convenience wrappers."""
from .cloud import CloudResource
from .config import ConfigResource
from .enterprises import EnterprisesResource
from .infrastructure import InfrastructureResource

__all__ = [
    "EnterprisesResource",
    "InfrastructureResource",
    "CloudResource",
    "ConfigResource",
]
