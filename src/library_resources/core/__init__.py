"""Registry, layout and scope resolution."""

from library_resources.core.layout import ResourceLayout
from library_resources.core.registry import Registry, RegistryStore, Resource, Scope
from library_resources.core.resolver import ScopeResolver

__all__ = ["Registry", "RegistryStore", "Resource", "ResourceLayout", "Scope", "ScopeResolver"]
