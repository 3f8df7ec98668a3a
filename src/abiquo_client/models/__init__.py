"""Data-transfer records mirroring Abiquo API resources."""
from .base import CollectionDto, Link, ResourceDto, find_by_name
from .config import HypervisorType, HypervisorTypes, License, Licenses
from .enterprise import Enterprise, Enterprises, User, Users
from .errors import ErrorEntry, ErrorList
from .infrastructure import Datacenter, Datacenters, Rack, Racks

__all__ = [
    "CollectionDto",
    "Datacenter",
    "Datacenters",
    "Enterprise",
    "Enterprises",
    "ErrorEntry",
    "ErrorList",
    "HypervisorType",
    "HypervisorTypes",
    "License",
    "Licenses",
    "Link",
    "Rack",
    "Racks",
    "ResourceDto",
    "User",
    "Users",
    "find_by_name",
]
